"""Case-insensitive mapping behaviour."""
import pytest

from assortment.keymap import CaseInsensitiveDict


def test_lookup_ignores_case():
    data = CaseInsensitiveDict()
    data["GPU"] = 1

    assert data["gpu"] == 1
    assert data.get("Gpu") == 1
    assert "gPu" in data
    assert len(data) == 1


def test_write_with_other_case_replaces_entry():
    data = CaseInsensitiveDict({"Graphic Card": 1})
    data["GRAPHIC CARD"] = 2

    assert len(data) == 1
    assert data["graphic card"] == 2
    assert list(data) == ["GRAPHIC CARD"]


def test_delete_and_missing_keys():
    data = CaseInsensitiveDict(cpu="x")
    del data["CPU"]

    assert "cpu" not in data
    assert data.get("cpu") is None
    with pytest.raises(KeyError):
        data["cpu"]


def test_casefold_handles_non_ascii():
    data = CaseInsensitiveDict({"STRASSE": 1})

    assert data["straße"] == 1


def test_non_string_keys_rejected():
    data = CaseInsensitiveDict()

    with pytest.raises(TypeError):
        data[1] = "x"
    assert 1 not in data


def test_equality_compares_folded_keys():
    assert CaseInsensitiveDict({"Nvidia": 1}) == {"NVIDIA": 1}
    assert CaseInsensitiveDict({"Nvidia": 1}) != {"AMD": 1}


def test_copy_is_independent():
    original = CaseInsensitiveDict({"a": 1})
    clone = original.copy()
    clone["A"] = 2

    assert original["a"] == 1
    assert clone["a"] == 2
