"""Pydantic schemas for cross-version merge results."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class VersionMergeResult(BaseModel):
    """Outcome of merging one version snapshot."""

    model_config = ConfigDict(extra="forbid")

    version_index: int = Field(..., ge=0, description="Position of the snapshot in the merge order")
    conflicts: List[str] = Field(
        default_factory=list,
        description="Paths whose values were kept because the snapshot disagreed",
    )


class MergeReport(BaseModel):
    """Conflicts found while folding version snapshots into one document."""

    model_config = ConfigDict(extra="forbid")

    versions: List[VersionMergeResult] = Field(default_factory=list)

    @property
    def total_conflicts(self) -> int:
        return sum(len(v.conflicts) for v in self.versions)

    @property
    def has_conflicts(self) -> bool:
        return self.total_conflicts > 0

    def conflicted_paths(self) -> List[str]:
        """Unique conflicted paths in first-seen order."""
        seen = {}
        for version in self.versions:
            for path in version.conflicts:
                seen.setdefault(path, None)
        return list(seen)
