"""
Tests for the add-record wizard state machine.
"""
from datetime import date

import pytest

from core.validation import CO_OWNER_ERROR, ID_ERROR, OWNER_ERROR
from core.wizard import AddRecordWizard, WizardError, WizardStep


@pytest.fixture
def wizard():
    w = AddRecordWizard()
    w.open()
    return w


def _advance_to(wizard, step):
    values = {
        WizardStep.ID: "f99999",
        WizardStep.OWNER: "123123",
        WizardStep.CO_OWNERS: "",
        WizardStep.SERIES: "A1",
    }
    while wizard.step < step:
        wizard.set_value(values[wizard.step])
        assert wizard.next()


class TestIdStep:

    def test_four_digit_id_rejected(self, wizard):
        wizard.set_record_id("f1234")
        assert wizard.next() is False
        assert wizard.step == WizardStep.ID
        assert wizard.errors == {"id": ID_ERROR}

    def test_valid_id_advances_and_clears_error(self, wizard):
        wizard.set_record_id("f1234")
        wizard.next()
        wizard.set_record_id("f12345")
        assert wizard.next() is True
        assert wizard.step == WizardStep.OWNER
        assert wizard.errors == {}

    def test_empty_id_rejected(self, wizard):
        assert wizard.next() is False


class TestOwnerStep:

    def test_five_digit_owner_rejected(self, wizard):
        _advance_to(wizard, WizardStep.OWNER)
        wizard.set_owner("12345")
        assert wizard.next() is False
        assert wizard.errors == {"owner": OWNER_ERROR}

    def test_six_digit_owner_accepted(self, wizard):
        _advance_to(wizard, WizardStep.OWNER)
        wizard.set_owner("123456")
        assert wizard.next() is True
        assert wizard.step == WizardStep.CO_OWNERS


class TestCoOwnersStep:

    def test_bad_co_owner_rejected(self, wizard):
        _advance_to(wizard, WizardStep.CO_OWNERS)
        wizard.set_co_owners("654321, 12a456")
        assert wizard.next() is False
        assert wizard.errors == {"coOwners": CO_OWNER_ERROR}

    def test_empty_co_owners_pass(self, wizard):
        _advance_to(wizard, WizardStep.CO_OWNERS)
        wizard.set_co_owners("")
        assert wizard.next() is True

    def test_skip_clears_invalid_input(self, wizard):
        _advance_to(wizard, WizardStep.CO_OWNERS)
        wizard.set_co_owners("12a456")
        wizard.next()
        wizard.skip()
        assert wizard.step == WizardStep.SERIES
        assert wizard.draft.co_owners is None
        assert wizard.errors == {}

    def test_skip_only_on_co_owners(self, wizard):
        with pytest.raises(WizardError):
            wizard.skip()


class TestSelections:

    def test_unknown_series_rejected(self, wizard):
        with pytest.raises(WizardError):
            wizard.choose_series("Z9")

    def test_unknown_model_rejected(self, wizard):
        with pytest.raises(WizardError):
            wizard.choose_model("X999")

    def test_series_step_has_no_required_value(self, wizard):
        _advance_to(wizard, WizardStep.SERIES)
        assert wizard.next() is True
        assert wizard.step == WizardStep.MODEL


class TestNavigation:

    def test_back_keeps_draft(self, wizard):
        _advance_to(wizard, WizardStep.CO_OWNERS)
        wizard.back()
        assert wizard.step == WizardStep.OWNER
        assert wizard.draft.owner == "123123"
        assert wizard.draft.record_id == "f99999"

    def test_back_on_first_step_is_noop(self, wizard):
        wizard.back()
        assert wizard.step == WizardStep.ID

    def test_next_on_last_step_rejected(self, wizard):
        _advance_to(wizard, WizardStep.MODEL)
        with pytest.raises(WizardError):
            wizard.next()

    def test_cancel_discards_everything(self, wizard):
        wizard.set_record_id("bad")
        wizard.next()
        wizard.cancel()
        assert wizard.is_open is False
        assert wizard.draft.record_id is None
        assert wizard.errors == {}

    def test_open_resets_previous_draft(self, wizard):
        _advance_to(wizard, WizardStep.SERIES)
        wizard.open()
        assert wizard.step == WizardStep.ID
        assert wizard.draft.owner is None

    def test_closed_wizard_rejects_transitions(self):
        w = AddRecordWizard()
        with pytest.raises(WizardError):
            w.next()

    def test_closed_wizard_rejects_input(self):
        w = AddRecordWizard()
        with pytest.raises(WizardError):
            w.set_value("f12345")
        assert w.draft.record_id is None


class TestSave:

    def test_save_scenario(self, wizard):
        wizard.set_record_id("f99999")
        assert wizard.next()
        wizard.set_owner("123123")
        assert wizard.next()
        wizard.skip()
        wizard.choose_series("A1")
        assert wizard.next()
        wizard.choose_model("X100")

        record = wizard.save(today=date(2026, 10, 19))

        assert record.id == "f99999"
        assert record.owner == "123123"
        assert record.co_owners == []
        assert record.series == "A1"
        assert record.model == "X100"
        assert record.broken_parts == ""
        assert record.date_added == "2026-10-19"
        assert wizard.is_open is False

    def test_save_defaults_to_today(self, wizard):
        _advance_to(wizard, WizardStep.MODEL)
        record = wizard.save()
        assert record.date_added == date.today().isoformat()
        assert record.model == ""

    def test_save_keeps_co_owner_order(self, wizard):
        _advance_to(wizard, WizardStep.CO_OWNERS)
        wizard.set_co_owners("222222, 111111")
        wizard.next()
        wizard.next()
        assert wizard.save().co_owners == ["222222", "111111"]

    def test_save_before_last_step_rejected(self, wizard):
        with pytest.raises(WizardError):
            wizard.save()
