"""Pydantic schemas for applicant data results."""

from applicant_data.schemas.merge_report import MergeReport, VersionMergeResult

__all__ = ["MergeReport", "VersionMergeResult"]
