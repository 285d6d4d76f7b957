import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hostedshop.errors import EmptyResultError, MalformedResponseError, ResultTypeError
from hostedshop.normalizer import BOOL, RECORD, SEQUENCE, normalize


def env(procedure, value):
    return {f"{procedure}Result": value}


@pytest.mark.parametrize("flag", [True, False])
def test_bool_result(flag):
    res = normalize("User_SetFields", env("User_SetFields", flag))
    assert res.kind == BOOL
    assert res.as_bool() is flag
    with pytest.raises(ResultTypeError):
        res.as_sequence()
    with pytest.raises(TypeError):
        res.as_record()


def test_bare_record_reads_both_ways():
    record = {"Id": 7, "Title": "Mug"}
    res = normalize("Product_GetById", env("Product_GetById", record))
    assert res.kind == RECORD
    assert res.as_record() == record
    assert res.as_sequence() == [record]
    with pytest.raises(ResultTypeError):
        res.as_bool()


def test_wrapped_collection():
    items = [{"Id": 1}, {"Id": 2}]
    res = normalize("User_GetAll", env("User_GetAll", {"item": items}))
    assert res.kind == SEQUENCE
    assert res.as_sequence() == items


def test_wrapped_single_item_is_one_element_sequence():
    res = normalize("Product_GetPictures", env("Product_GetPictures", {"item": {"Id": 3}}))
    assert res.as_sequence() == [{"Id": 3}]
    assert res.as_record() == {"Id": 3}


def test_plain_list_is_sequence():
    res = normalize("Order_GetByDate", env("Order_GetByDate", [{"Id": 1}, {"Id": 2}]))
    assert [r["Id"] for r in res.as_sequence()] == [1, 2]


def test_several_records_are_not_a_record():
    res = normalize("Order_GetById", env("Order_GetById", {"item": [{"Id": 1}, {"Id": 2}]}))
    with pytest.raises(ResultTypeError):
        res.as_record()


@pytest.mark.parametrize("value", [None, {"item": None}, {"item": []}, []])
def test_empty_collection(value):
    res = normalize("Order_GetById", env("Order_GetById", value))
    assert res.as_sequence() == []
    with pytest.raises(EmptyResultError) as exc:
        res.as_record()
    assert exc.value.procedure == "Order_GetById"


def test_shape_not_procedure_name_decides():
    res = normalize("User_GetAll", env("User_GetAll", {"Id": 1, "Email": "a@b.dk"}))
    assert res.kind == RECORD


def test_record_with_item_and_other_fields_stays_record():
    value = {"item": "x", "Id": 4}
    res = normalize("Order_GetById", env("Order_GetById", value))
    assert res.as_record() == value


def test_missing_result_key():
    with pytest.raises(MalformedResponseError) as exc:
        normalize("Order_GetById", {"SomethingElse": True})
    assert exc.value.procedure == "Order_GetById"


def test_non_mapping_envelope():
    with pytest.raises(MalformedResponseError):
        normalize("Order_GetById", None)


def test_scalar_payload_is_malformed():
    with pytest.raises(MalformedResponseError):
        normalize("Product_Delete", env("Product_Delete", 12))


def test_collection_of_scalars_is_malformed():
    with pytest.raises(MalformedResponseError):
        normalize("User_GetAll", env("User_GetAll", {"item": [1, 2]}))
