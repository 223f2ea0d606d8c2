"""Support matrix and Baseline year comparison between two features."""

from typing import Optional

from web_baseline_mcp.models.feature_types import (
    TRACKED_BROWSERS,
    BaselineDifference,
    ComparisonResult,
    FeatureRecord,
    SupportRow,
    SupportValue,
)

SUPPORTED = "supported"
NOT_SUPPORTED = "not supported"


def support_label(value: Optional[SupportValue]) -> str:
    """Version strings pass through; other truthy values mean supported."""
    if isinstance(value, str):
        return value
    return SUPPORTED if value else NOT_SUPPORTED


def compare_features(a: FeatureRecord, b: FeatureRecord) -> ComparisonResult:
    """Diff two features' support matrices and Baseline high years.

    ``baselineDifference`` is only present when both features have a
    Baseline high date.
    """
    if a is None or b is None:
        raise TypeError("compare_features requires two feature records")

    rows = [
        SupportRow(
            browser=browser,
            a_version=support_label(a.support.get(browser)),
            b_version=support_label(b.support.get(browser)),
        )
        for browser in TRACKED_BROWSERS
    ]

    baseline_difference = None
    year_a, year_b = a.baseline_year, b.baseline_year
    if year_a is not None and year_b is not None:
        baseline_difference = BaselineDifference(
            year_diff=abs(year_a - year_b),
            a_first=year_a < year_b,
        )

    return ComparisonResult(
        feature_a=a,
        feature_b=b,
        baseline_difference=baseline_difference,
        support_difference=rows,
    )
