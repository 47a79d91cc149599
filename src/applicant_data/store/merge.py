"""Cross-version merge of applicant data.

Rules, applied key by key from the incoming document:
- Absent here: copied in.
- Object on both sides: merged recursively.
- Array on both sides: incoming elements are appended (no dedup).
- Anything else that differs, including a type difference: reported as a
  conflict and left untouched.
"""

import copy
import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from applicant_data.path import Path, PathSegment
from applicant_data.schemas.merge_report import MergeReport, VersionMergeResult

if TYPE_CHECKING:
    from applicant_data.store.applicant_data import ApplicantData
    from applicant_data.store.query import QueryEngine

logger = logging.getLogger(__name__)


def _same_scalar(existing: Any, incoming: Any) -> bool:
    return type(existing) is type(incoming) and existing == incoming


def merge_tree(target: "ApplicantData", other: Dict[str, Any], root: Path) -> List[Path]:
    """Merge the object `other` into `target` at `root`.

    Returns:
        Conflicting paths, in document order.

    Raises:
        LockedApplicantDataError: If target is locked.
    """
    from applicant_data.store.applicant_data import MISSING

    target._check_locked()
    conflicts: List[Path] = []

    for key, incoming in other.items():
        path = root.append_segment(PathSegment(key))
        existing = target._get(path)

        if existing is MISSING:
            target._put(path, copy.deepcopy(incoming))
        elif isinstance(incoming, dict) and isinstance(existing, dict):
            conflicts.extend(merge_tree(target, incoming, path))
        elif isinstance(incoming, list) and isinstance(existing, list):
            # TODO: match repeated entities by name instead of appending duplicates
            target._append(path, copy.deepcopy(incoming))
        elif not _same_scalar(existing, incoming):
            logger.debug(f"Merge conflict at {path}: keeping {existing!r} over {incoming!r}")
            conflicts.append(path)

    return conflicts


def merge_versions(
    snapshots: Sequence["ApplicantData"],
    query_engine: Optional["QueryEngine"] = None,
) -> Tuple["ApplicantData", MergeReport]:
    """Fold version snapshots into a fresh document.

    Snapshots are merged in order, so earlier ones win conflicts. The first
    snapshot with a preferred locale supplies the merged document's locale.

    Returns:
        The merged document and a report of conflicts per snapshot.
    """
    from applicant_data.store.applicant_data import ApplicantData

    locale = next(
        (s.preferred_locale for s in snapshots if s.has_preferred_locale()), None
    )
    merged = ApplicantData(preferred_locale=locale, query_engine=query_engine)
    report = MergeReport()

    for index, snapshot in enumerate(snapshots):
        conflicts = merged.merge_from(snapshot)
        report.versions.append(
            VersionMergeResult(version_index=index, conflicts=[str(p) for p in conflicts])
        )
        if conflicts:
            logger.info(f"Version {index}: {len(conflicts)} conflicting path(s) kept from earlier versions")

    return merged, report
