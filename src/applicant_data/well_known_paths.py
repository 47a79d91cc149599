"""Canonical paths consumed by profile population (e.g. login flows)."""

from applicant_data.path import Path
from applicant_data.scalars import Scalar

APPLICANT = "applicant"
APPLICANT_PATH = Path.create(APPLICANT)

APPLICANT_NAME = APPLICANT_PATH.join("name")
APPLICANT_FIRST_NAME = APPLICANT_NAME.join(Scalar.FIRST_NAME)
APPLICANT_MIDDLE_NAME = APPLICANT_NAME.join(Scalar.MIDDLE_NAME)
APPLICANT_LAST_NAME = APPLICANT_NAME.join(Scalar.LAST_NAME)
