"""
Request-help wizard: three ordered steps, each gated by a presence check.

The wizard keeps no server state. Fields from earlier steps are carried
along as hidden inputs, so every function here works on a plain dict.
"""

import os
from typing import Iterable, List, Mapping, Optional, Tuple


FIRST_STEP = 1
LAST_STEP = 3

STEP_TITLES = {
    1: "Personal Information",
    2: "Ailment Details",
    3: "Supporting Documents",
}

STEP_FIELDS = {
    1: ("full_name", "email", "phone", "address", "age", "gender"),
    2: ("ailment_type", "description", "treatment_progress"),
    3: (),
}

ALL_FIELDS = STEP_FIELDS[1] + STEP_FIELDS[2]

FIELD_LABELS = {
    "full_name": "Full name",
    "email": "Email address",
    "phone": "Phone number",
    "address": "Address",
    "age": "Age",
    "gender": "Gender",
    "ailment_type": "Type of ailment",
    "description": "Detailed description",
    "treatment_progress": "Current treatment progress",
}

ALLOWED_DOCUMENT_EXTENSIONS = (".pdf", ".jpg", ".jpeg", ".png", ".doc", ".docx")

# camelCase names posted by the JavaScript client.
FIELD_ALIASES = {
    "fullName": "full_name",
    "ailmentType": "ailment_type",
    "treatmentProgress": "treatment_progress",
}


def clamp_step(step: int) -> int:
    return max(FIRST_STEP, min(LAST_STEP, step))


def collect_fields(form: Mapping) -> dict:
    """Pull the wizard's text fields out of a submitted form, stripped."""
    data = {}
    for field in ALL_FIELDS:
        raw = form.get(field)
        data[field] = raw.strip() if isinstance(raw, str) else ""
    for alias, field in FIELD_ALIASES.items():
        raw = form.get(alias)
        if not data[field] and isinstance(raw, str):
            data[field] = raw.strip()
    return data


def missing_fields(step: int, data: Mapping[str, str]) -> List[str]:
    return [field for field in STEP_FIELDS[step] if not (data.get(field) or "").strip()]


def usable_documents(files: Iterable) -> list:
    """Drop the empty parts browsers send for an untouched file input."""
    return [f for f in files if getattr(f, "filename", None)]


def document_errors(documents: list) -> List[str]:
    if not documents:
        return ["Please attach at least one supporting document."]
    errors = []
    for document in documents:
        _, ext = os.path.splitext(document.filename.lower())
        if ext not in ALLOWED_DOCUMENT_EXTENSIONS:
            errors.append(f"{document.filename}: unsupported file type.")
    return errors


def step_errors(step: int, data: Mapping[str, str], documents: Optional[list] = None) -> List[str]:
    errors = [f"{FIELD_LABELS[field]} is required." for field in missing_fields(step, data)]
    if step == LAST_STEP:
        errors.extend(document_errors(documents or []))
    return errors


def next_step(step: int, data: Mapping[str, str]) -> Tuple[int, List[str]]:
    """
    Move forward one step if the current one is complete.

    Returns the step to show and the errors that kept the user in place.
    """
    step = clamp_step(step)
    if step == LAST_STEP:
        return step, []
    errors = step_errors(step, data)
    if errors:
        return step, errors
    return step + 1, []


def previous_step(step: int) -> int:
    return clamp_step(step - 1)


def first_incomplete_step(data: Mapping[str, str]) -> Optional[int]:
    for step in (1, 2):
        if missing_fields(step, data):
            return step
    return None


def progress_percent(step: int) -> int:
    return round(clamp_step(step) / LAST_STEP * 100)
