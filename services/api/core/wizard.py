"""
Add-record wizard - the 5-step dialog that builds a new Record.

Steps:
1. ID         - 'f' + 5 digits
2. OWNER      - 6 digits
3. CO_OWNERS  - optional, comma-separated 6-digit ids (can be skipped)
4. SERIES     - one of SERIES_OPTIONS
5. MODEL      - one of MODEL_OPTIONS, then Save
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Dict, List, Optional

from models import MODEL_OPTIONS, SERIES_OPTIONS, Record
from core.validation import (
    parse_co_owners_input,
    validate_co_owners,
    validate_owner,
    validate_record_id,
)


class WizardStep(IntEnum):
    ID = 1
    OWNER = 2
    CO_OWNERS = 3
    SERIES = 4
    MODEL = 5


class WizardError(ValueError):
    """Raised for a transition the current step does not allow."""


@dataclass
class WizardDraft:
    """Values entered so far. None means 'not entered yet'."""
    record_id: Optional[str] = None
    owner: Optional[str] = None
    co_owners: Optional[List[str]] = None
    series: Optional[str] = None
    model: Optional[str] = None


@dataclass
class AddRecordWizard:
    is_open: bool = False
    step: WizardStep = WizardStep.ID
    draft: WizardDraft = field(default_factory=WizardDraft)
    # field name -> inline message ("id", "owner", "coOwners")
    errors: Dict[str, str] = field(default_factory=dict)

    def open(self) -> None:
        self.is_open = True
        self.step = WizardStep.ID
        self.draft = WizardDraft()
        self.errors = {}

    def cancel(self) -> None:
        """Close the dialog and throw away everything entered."""
        self.is_open = False
        self.step = WizardStep.ID
        self.draft = WizardDraft()
        self.errors = {}

    def _require_open(self) -> None:
        if not self.is_open:
            raise WizardError("Wizard is not open")

    # ---- field input ----

    def set_record_id(self, value: str) -> None:
        self.draft.record_id = (value or "").strip()

    def set_owner(self, value: str) -> None:
        self.draft.owner = (value or "").strip()

    def set_co_owners(self, raw: str) -> None:
        self.draft.co_owners = parse_co_owners_input(raw)

    def choose_series(self, value: str) -> None:
        if value not in SERIES_OPTIONS:
            raise WizardError(f"Unknown series: {value}")
        self.draft.series = value

    def choose_model(self, value: str) -> None:
        if value not in MODEL_OPTIONS:
            raise WizardError(f"Unknown model: {value}")
        self.draft.model = value

    def set_value(self, value: Optional[str]) -> None:
        """Apply a submitted form value to whichever field the current step edits."""
        self._require_open()
        if value is None:
            return
        if self.step == WizardStep.ID:
            self.set_record_id(value)
        elif self.step == WizardStep.OWNER:
            self.set_owner(value)
        elif self.step == WizardStep.CO_OWNERS:
            self.set_co_owners(value)
        elif self.step == WizardStep.SERIES:
            if value:
                self.choose_series(value)
        elif self.step == WizardStep.MODEL:
            if value:
                self.choose_model(value)

    # ---- transitions ----

    def _validate_current(self) -> Dict[str, str]:
        if self.step == WizardStep.ID:
            err = validate_record_id(self.draft.record_id)
            return {"id": err} if err else {}
        if self.step == WizardStep.OWNER:
            err = validate_owner(self.draft.owner)
            return {"owner": err} if err else {}
        if self.step == WizardStep.CO_OWNERS:
            err = validate_co_owners(self.draft.co_owners or [])
            return {"coOwners": err} if err else {}
        return {}

    def next(self) -> bool:
        """
        Validate the current step and advance.
        Returns False (and sets the inline error) when validation fails.
        """
        self._require_open()
        if self.step == WizardStep.MODEL:
            raise WizardError("Last step: use save")

        errors = self._validate_current()
        if errors:
            self.errors.update(errors)
            return False

        self.errors = {}
        self.step = WizardStep(self.step + 1)
        return True

    def back(self) -> None:
        self._require_open()
        if self.step > WizardStep.ID:
            self.step = WizardStep(self.step - 1)

    def skip(self) -> None:
        """Co-owners are optional: skipping clears them and moves on."""
        self._require_open()
        if self.step != WizardStep.CO_OWNERS:
            raise WizardError("Only the co-owners step can be skipped")
        self.draft.co_owners = None
        self.errors = {}
        self.step = WizardStep.SERIES

    def save(self, today: Optional[date] = None) -> Record:
        """Build the Record from the draft and close the dialog."""
        self._require_open()
        if self.step != WizardStep.MODEL:
            raise WizardError("Save is only available on the last step")

        d = self.draft
        record = Record(
            id=d.record_id or "",
            date_added=(today or date.today()).isoformat(),
            owner=d.owner or "",
            co_owners=list(d.co_owners or []),
            series=d.series or "",
            model=d.model or "",
            broken_parts="",
        )
        self.is_open = False
        self.step = WizardStep.ID
        self.draft = WizardDraft()
        self.errors = {}
        return record
