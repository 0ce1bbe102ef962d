"""
Shared Test Configuration and Fixtures

Sample search results and result files used across the test suite.
"""

import json
import logging

import pytest

from searchfilter.results import FileSearchResult, Licenses, SearchResult


@pytest.fixture
def timon_result():
    """A file result with every haystack field populated."""
    return FileSearchResult(
        display_name="Timon of Athens",
        details_url="http://shakespeare.mit.edu/timon/timon.4.1.html",
        thumbnail_url="Let me look back upon thee. O thou wall, That girdlest in those wolves, dive in the earth",
        source="MIT",
        license=Licenses.PUBLIC_DOMAIN_MARK,
        filename="timon_of_athens.txt",
        size=0,
    )


@pytest.fixture
def mit_result():
    """A minimal result with only a source and a display name."""
    return SearchResult(display_name="Timon of Athens", source="MIT")


@pytest.fixture
def sample_raw_results():
    """Raw result mappings as they appear in a results JSON file."""
    return [
        {
            "display_name": "Timon of Athens",
            "source": "MIT",
            "details_url": "http://shakespeare.mit.edu/timon/timon.4.1.html",
            "filename": "timon_of_athens.pdf",
            "license": "Public Domain Mark",
        },
        {
            "display_name": "Hamlet live recording",
            "source": "Archive",
            "details_url": "https://archive.example.org/hamlet",
            "thumbnail_url": "https://archive.example.org/hamlet.jpg",
            "filename": "hamlet.mp4",
        },
        {
            "display_name": "Hamlet study notes",
            "source": "Archive",
            "details_url": "https://archive.example.org/hamlet-notes",
        },
    ]


@pytest.fixture
def results_file(tmp_path, sample_raw_results):
    """JSON file holding sample_raw_results."""
    path = tmp_path / "results.json"
    path.write_text(json.dumps(sample_raw_results), encoding="utf-8")
    return path


@pytest.fixture
def restore_root_logging():
    """Restore root logger handlers and level changed by logging.basicConfig()."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
