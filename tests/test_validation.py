"""Tests for contact and task field validation."""

from datetime import date

import pytest

from contactbook.domain.validation import (
    validate_address,
    validate_contact_create,
    validate_contact_id,
    validate_contact_update,
    validate_description,
    validate_due_date,
    validate_email,
    validate_name,
    validate_phone,
    validate_task_create,
    validate_task_update,
    validate_title,
)

TODAY = date(2025, 6, 1)


@pytest.mark.parametrize("phone", ["555-1234", "000-0000"])
def test_phone_accepted(phone):
    assert validate_phone(phone).is_valid


@pytest.mark.parametrize("phone", ["5551234", "555-12345", "abc-1234", "", None, 5551234])
def test_phone_rejected(phone):
    check = validate_phone(phone)
    assert not check.is_valid
    assert check.error


def test_phone_length_reported_before_format():
    assert "exactly 8" in validate_phone("555-12345").error
    assert "format" in validate_phone("abc-1234").error


def test_email_rules():
    assert validate_email("a@b.com").is_valid
    assert not validate_email("").is_valid
    assert not validate_email("no-at-sign.com").is_valid
    assert not validate_email("a b@c.com").is_valid
    assert not validate_email("a@b").is_valid
    assert not validate_email("x" * 95 + "@b.com").is_valid


def test_name_is_trimmed_before_length_check():
    assert validate_name("Al").is_valid
    assert not validate_name("  A  ").is_valid
    assert not validate_name("x" * 101).is_valid
    assert validate_name("x" * 100).is_valid
    assert validate_name(None).error == "Name must be a string"


def test_address_bounds():
    assert validate_address("1 Main Street").is_valid
    assert not validate_address(" 12  ").is_valid
    assert not validate_address("x" * 201).is_valid


def test_title_bounds():
    assert validate_title("Call back").is_valid
    assert not validate_title(" x ").is_valid
    assert not validate_title("x" * 201).is_valid


def test_description_is_optional():
    assert validate_description(None).is_valid
    assert validate_description("").is_valid
    assert validate_description("x" * 500).is_valid
    assert not validate_description("x" * 501).is_valid


def test_due_date_past_rejected():
    check = validate_due_date("2025-01-01", today=TODAY)
    assert not check.is_valid
    assert "cannot be less than current date" in check.error


def test_due_date_today_and_future_accepted():
    assert validate_due_date("2025-06-01", today=TODAY).is_valid
    assert validate_due_date("2099-12-31", today=TODAY).is_valid


@pytest.mark.parametrize("value", ["2025-13-01", "2025-02-30", "2025-00-10"])
def test_due_date_impossible_calendar_day_rejected(value):
    assert validate_due_date(value, today=TODAY).error == "Due date is not a valid date"


@pytest.mark.parametrize("value", ["2025/07/01", "01-07-2025", "2025-7-1", "tomorrow"])
def test_due_date_wrong_format_rejected(value):
    assert "YYYY-MM-DD" in validate_due_date(value, today=TODAY).error


def test_due_date_omitted_accepted():
    assert validate_due_date(None, today=TODAY).is_valid
    assert validate_due_date("", today=TODAY).is_valid


def test_contact_id_must_be_non_blank_string():
    assert validate_contact_id("1").is_valid
    assert validate_contact_id("   ").error == "Contact ID is required"
    assert validate_contact_id(None).error == "Contact ID must be a string"


def test_contact_create_collects_every_failing_field_in_order():
    result = validate_contact_create(name="A", email="bad", phone="123", address="x")
    assert not result.is_valid
    assert [e.field for e in result.errors] == ["name", "email", "phone", "address"]


def test_contact_create_valid():
    result = validate_contact_create(
        name="Ann Lee", email="a@b.com", phone="555-0001", address="1 Main Street"
    )
    assert result.is_valid
    assert result.errors == []


def test_contact_update_only_checks_present_fields():
    assert validate_contact_update({}).is_valid
    assert validate_contact_update({"email": "a@b.com"}).is_valid
    result = validate_contact_update({"phone": "nope", "address": "1 Main Street"})
    assert [e.field for e in result.errors] == ["phone"]


def test_task_create_uses_wire_field_names():
    result = validate_task_create(
        contact_id="", title="x", description="y" * 501, due_date="2020-01-01", today=TODAY
    )
    assert [e.field for e in result.errors] == ["contactId", "title", "description", "dueDate"]


def test_task_update_only_checks_present_fields():
    assert validate_task_update({"completed": True}, today=TODAY).is_valid
    result = validate_task_update({"due_date": "2024-01-01"}, today=TODAY)
    assert [e.field for e in result.errors] == ["dueDate"]
    assert validate_task_update({"description": None}, today=TODAY).is_valid
