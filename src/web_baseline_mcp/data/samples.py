"""
Bundled sample compatibility data.

Served whenever no external dataset is configured or the external dataset
cannot be loaded.
"""

SAMPLE_FEATURES = {
    "css-has-selector": {
        "name": "CSS :has() selector",
        "description": (
            "The :has() CSS pseudo-class represents an element if any of the "
            "selectors passed as parameters match at least one element."
        ),
        "mdn_url": "https://developer.mozilla.org/en-US/docs/Web/CSS/:has",
        "baseline": {"high": "2023-12-01", "low": "2023-03-01"},
        "support": {
            "chrome": "105",
            "edge": "105",
            "firefox": "121",
            "safari": "15.4",
        },
        "status": {"standard_track": True},
    },
    "offscreen-canvas": {
        "name": "OffscreenCanvas",
        "description": (
            "The OffscreenCanvas interface provides a canvas that can be "
            "rendered off screen."
        ),
        "mdn_url": "https://developer.mozilla.org/en-US/docs/Web/API/OffscreenCanvas",
        "baseline": {"high": "2022-03-01", "low": "2021-09-01"},
        "support": {
            "chrome": "69",
            "edge": "79",
            "firefox": "105",
            "safari": "16.4",
        },
        "status": {"standard_track": True},
    },
    "webusb": {
        "name": "WebUSB API",
        "description": (
            "The WebUSB API provides a way to safely expose USB device "
            "services to the web."
        ),
        "mdn_url": "https://developer.mozilla.org/en-US/docs/Web/API/USB",
        "support": {
            "chrome": "61",
            "edge": "79",
            "firefox": False,
            "safari": False,
        },
        "status": {"experimental": True},
    },
    "fetch-streaming": {
        "name": "Fetch Streaming",
        "description": "Streaming support for the Fetch API using ReadableStream.",
        "mdn_url": (
            "https://developer.mozilla.org/en-US/docs/Web/API/Fetch_API/"
            "Using_Fetch#processing_a_text_file_line_by_line"
        ),
        "baseline": {"high": "2022-07-01", "low": "2020-01-01"},
        "support": {
            "chrome": "43",
            "edge": "14",
            "firefox": "65",
            "safari": "10.1",
        },
        "status": {"standard_track": True},
    },
}

SAMPLE_BASELINE = {
    2024: [
        {
            "feature_id": "css-has-selector",
            "quarter": "Q1",
            "description": "CSS :has() pseudo-class selector",
        }
    ],
    2023: [
        {
            "feature_id": "css-has-selector",
            "quarter": "Q4",
            "description": "CSS :has() pseudo-class selector",
        }
    ],
    2022: [
        {
            "feature_id": "offscreen-canvas",
            "quarter": "Q1",
            "description": "OffscreenCanvas API",
        },
        {
            "feature_id": "fetch-streaming",
            "quarter": "Q3",
            "description": "Fetch API streaming support",
        },
    ],
}
