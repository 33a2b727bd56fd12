"""Product sources."""
import json

import pytest

from assortment.errors import CatalogUnavailable, InvalidArgument
from assortment.importer import JsonProductSource, StaticProductSource, load_index
from assortment.product import Product


def write_catalog(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_json_source_reads_records(tmp_path):
    catalog = write_catalog(
        tmp_path / "products.json",
        [
            {"model": "X1", "type": "GPU", "name": "Nvidia 980"},
            {"productCode": "X2", "category": "GPU", "title": "AMD 970"},
        ],
    )

    products = list(JsonProductSource(catalog).all_products())

    assert products == [
        Product(model="X1", type="GPU", name="Nvidia 980"),
        Product(model="X2", type="GPU", name="AMD 970"),
    ]


def test_json_source_skips_unusable_records(tmp_path, caplog):
    catalog = write_catalog(
        tmp_path / "products.json",
        [{"name": "No model"}, "not a record", {"model": 42, "type": "Cable"}],
    )

    products = list(JsonProductSource(catalog).all_products())

    assert products == [Product(model="42", type="Cable", name="")]
    assert "Skipping catalog record" in caplog.text


def test_missing_file_without_url_is_unavailable(tmp_path):
    source = JsonProductSource(tmp_path / "missing.json")

    with pytest.raises(CatalogUnavailable):
        load_index(source)


def test_lfs_pointer_is_unavailable(tmp_path):
    pointer = tmp_path / "products.json"
    pointer.write_text("version https://git-lfs.github.com/spec/v1\noid sha256:abc\nsize 10\n", encoding="utf-8")

    with pytest.raises(CatalogUnavailable):
        list(JsonProductSource(pointer).all_products())


def test_invalid_json_is_unavailable(tmp_path):
    broken = tmp_path / "products.json"
    broken.write_text("[{", encoding="utf-8")

    with pytest.raises(CatalogUnavailable):
        list(JsonProductSource(broken).all_products())


def test_non_array_is_unavailable(tmp_path):
    catalog = write_catalog(tmp_path / "products.json", {"model": "X1"})

    with pytest.raises(CatalogUnavailable):
        list(JsonProductSource(catalog).all_products())


def test_load_index_from_static_source(gpus):
    index = load_index(StaticProductSource(gpus))

    assert len(index) == 2
    assert index.get_product("x2").name == "AMD 970"


def test_from_record_requires_model():
    with pytest.raises(InvalidArgument):
        Product.from_record({"type": "GPU", "name": "Nameless"})


def test_description_joins_name_and_type():
    assert Product(model="X1", type="GPU", name="Nvidia 980").description == "Nvidia 980 GPU"
