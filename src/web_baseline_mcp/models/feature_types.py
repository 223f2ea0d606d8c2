from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

SupportValue = Union[str, bool]

# Browsers shown in comparisons, in output order
TRACKED_BROWSERS = ("chrome", "edge", "firefox", "safari")

MOBILE_BROWSERS = ("chrome_android", "firefox_android", "safari_ios")

ALL_BROWSERS = TRACKED_BROWSERS + MOBILE_BROWSERS


class BrowserSupport(BaseModel):
    """Minimum supporting version per browser.

    A string is a version, ``False`` is explicit non-support and ``None``
    means unknown. The set of browsers is closed.
    """

    chrome: Optional[SupportValue] = None
    edge: Optional[SupportValue] = None
    firefox: Optional[SupportValue] = None
    safari: Optional[SupportValue] = None
    chrome_android: Optional[SupportValue] = None
    firefox_android: Optional[SupportValue] = None
    safari_ios: Optional[SupportValue] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    def get(self, browser: str) -> Optional[SupportValue]:
        if browser not in ALL_BROWSERS:
            raise KeyError(browser)
        return getattr(self, browser)


class BaselineStatus(BaseModel):
    """Baseline milestones: ``high`` is widely available, ``low`` newly available."""

    high: Optional[date] = None
    low: Optional[date] = None

    model_config = ConfigDict(frozen=True)


class FeatureStatus(BaseModel):
    experimental: bool = False
    standard_track: bool = Field(False, alias="standardTrack")
    deprecated: bool = False

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class FeatureRecord(BaseModel):
    """A web platform feature and its cross-browser support matrix."""

    id: str
    name: str
    description: Optional[str] = None
    description_html: Optional[str] = Field(None, alias="descriptionHtml")
    mdn_url: Optional[str] = Field(None, alias="mdnUrl")
    spec_url: Optional[str] = Field(None, alias="specUrl")
    group: Optional[str] = None
    compat_features: Sequence[str] = Field(
        default_factory=tuple, alias="compatFeatures"
    )
    search_terms: Sequence[str] = Field(default_factory=tuple, alias="searchTerms")
    baseline: Optional[BaselineStatus] = None
    support: BrowserSupport = Field(default_factory=BrowserSupport)
    status: FeatureStatus = Field(default_factory=FeatureStatus)

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def baseline_year(self) -> Optional[int]:
        if self.baseline and self.baseline.high:
            return self.baseline.high.year
        return None

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"search_terms"},
        )


class BaselineYearEntry(BaseModel):
    """A feature that reached Baseline in a given year."""

    feature_id: str = Field(..., alias="featureId")
    year: int
    quarter: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class SearchHit(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    group: Optional[str] = None


class SupportRow(BaseModel):
    browser: str
    a_version: str = Field(..., alias="aVersion")
    b_version: str = Field(..., alias="bVersion")

    model_config = ConfigDict(populate_by_name=True)


class BaselineDifference(BaseModel):
    year_diff: int = Field(..., alias="yearDiff")
    a_first: bool = Field(..., alias="aFirst")

    model_config = ConfigDict(populate_by_name=True)


class ComparisonResult(BaseModel):
    """Structured diff of two features' support matrices and Baseline years."""

    feature_a: FeatureRecord = Field(..., alias="featureA")
    feature_b: FeatureRecord = Field(..., alias="featureB")
    baseline_difference: Optional[BaselineDifference] = Field(
        None, alias="baselineDifference"
    )
    support_difference: List[SupportRow] = Field(..., alias="supportDifference")

    model_config = ConfigDict(populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "featureA": self.feature_a.to_json_dict(),
            "featureB": self.feature_b.to_json_dict(),
            **self.model_dump(
                mode="json",
                by_alias=True,
                exclude_none=True,
                include={"baseline_difference", "support_difference"},
            ),
        }
