import uuid

import pytest

from api.assets.models import (
    validate_asset_create,
    validate_asset_update,
    validate_assets_bulk,
    validate_bulk_assignments,
)
from api.notes.models import validate_note_create, validate_note_update
from api.projects.models import validate_project_create
from core.validation import (
    FieldError,
    MalformedIdentifierError,
    ValidationFailed,
    parse_identifier,
)


def asset(**overrides):
    payload = {"name": "Lot", "description": "Lot 1", "location": {"lat": 0, "lng": 0}}
    payload.update(overrides)
    return payload


def test_success_carries_normalised_model():
    result = validate_asset_create(asset(name="  Lot  ", address="   "))
    assert result.ok
    assert result.errors == []
    assert result.value.name == "Lot"
    assert result.value.address is None
    assert result.value.status == "active"


def test_failure_carries_every_error_and_no_value():
    result = validate_asset_create({"location": {"lat": -91, "lng": 181}})
    assert not result.ok
    assert result.value is None
    paths = {e.path for e in result.errors}
    assert paths == {"name", "description", "location.lat", "location.lng"}

    with pytest.raises(ValidationFailed) as exc_info:
        result.unwrap()
    assert exc_info.value.errors == result.errors


def test_non_object_payload():
    result = validate_asset_create(["not", "a", "dict"])
    assert result.errors == [FieldError(path="__root__", message="Expected a JSON object")]


@pytest.mark.parametrize("value", ["2024-05-01T10:00:00Z", "2024-05-01"])
def test_dates_accept_iso_strings(value):
    result = validate_project_create({"name": "P", "start_date": value})
    assert result.ok, result.errors
    assert result.value.start_date.year == 2024


def test_unparseable_date_names_the_field():
    result = validate_asset_create(asset(auction_date="next tuesday"))
    assert [e.path for e in result.errors] == ["auction_date"]


def test_update_is_partial_and_rejects_nulls():
    result = validate_asset_update({"status": "retired"})
    assert result.ok
    assert result.value.column_changes() == {"status": "retired"}

    result = validate_asset_update({"location": None, "description": None, "tct_no": None})
    paths = sorted(e.path for e in result.errors)
    assert paths == ["description", "location"]

    result = validate_asset_update({"location": {"lat": 1.5, "lng": 2.5}})
    assert result.value.column_changes() == {"location_lat": 1.5, "location_lng": 2.5}


def test_bulk_validation_reports_index():
    result = validate_assets_bulk({"assets": [asset(), asset(name="")]})
    assert [e.path for e in result.errors] == ["assets.1.name"]

    result = validate_assets_bulk({"assets": [asset(), asset(name="Two")]})
    assert result.ok
    assert len(result.value.assets) == 2


def test_note_link_rule_only_on_create():
    result = validate_note_create({"content": "x"})
    assert len(result.errors) == 1
    assert result.errors[0].path == "asset_id"

    result = validate_note_create({"content": "x", "case_id": str(uuid.uuid4())})
    assert result.ok

    result = validate_note_update({"asset_id": None, "project_id": None, "case_id": None})
    assert result.ok


def test_foreign_keys_must_be_uuids():
    result = validate_project_create({"name": "P", "asset_id": "1234"})
    assert result.errors == [FieldError(path="asset_id", message="Invalid identifier format")]


def test_parse_identifier():
    value = uuid.uuid4()
    assert parse_identifier(str(value).upper()) == value
    assert parse_identifier(value) == value

    with pytest.raises(MalformedIdentifierError) as exc_info:
        parse_identifier("12345", "asset_id")
    assert exc_info.value.field_name == "asset_id"

    with pytest.raises(MalformedIdentifierError):
        parse_identifier(None)


@pytest.mark.parametrize(
    "value",
    ["0f8fad5bd9cb469fa16570867728950e", "{0f8fad5b-d9cb-469f-a165-70867728950e}", "urn:uuid:0f8fad5b-d9cb-469f-a165-70867728950e", 12345],
)
def test_body_ids_use_the_path_identifier_format(value):
    result = validate_note_create({"content": "x", "case_id": value})
    assert result.errors == [FieldError(path="case_id", message="Invalid identifier format")]

    with pytest.raises(MalformedIdentifierError):
        parse_identifier(value, "case_id")


def test_bulk_assignment_project_id_is_canonical():
    result = validate_bulk_assignments({"assignments": [{"project_id": uuid.uuid4().hex, "asset_id": ""}]})
    assert [e.path for e in result.errors] == ["assignments.0.project_id"]

    result = validate_bulk_assignments({"assignments": [{"project_id": str(uuid.uuid4()), "asset_id": ""}]})
    assert result.ok
    assert result.value.assignments[0].asset_id is None
