"""Shared catalog fixtures."""
import pytest

from assortment.indexing import build_index
from assortment.product import Product

NVIDIA = Product(model="X1", type="GPU", name="Nvidia 980")
AMD = Product(model="X2", type="GPU", name="AMD 970")


@pytest.fixture
def gpus():
    return [NVIDIA, AMD]


@pytest.fixture
def gpu_index(gpus):
    return build_index(gpus)


@pytest.fixture
def shop_products():
    return [
        Product(model="GTX-980", type="Graphic Card", name="Nvidia GeForce GTX 980"),
        Product(model="GTX-970", type="Graphic Card", name="Nvidia GeForce GTX 970"),
        Product(model="RX-480", type="Graphic Card", name="AMD Radeon RX 480"),
        Product(model="I7-6700K", type="CPU", name="Intel Core i7 6700K"),
        Product(model="FX-8350", type="CPU", name="AMD FX 8350"),
        Product(model="Z170-A", type="Motherboard", name="Asus Z170-A Intel"),
    ]


@pytest.fixture
def shop_index(shop_products):
    return build_index(shop_products)
