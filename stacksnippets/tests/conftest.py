import pytest

from stacksnippets import make_parser

BEGIN = "<!-- begin snippet: js hide: null console: true babel: false babelPresetReact: null babelPresetTS: null -->"

EXAMPLE = f"""{BEGIN}

<!-- language: lang-js -->

    console.log("hi");

<!-- language: lang-css -->

    body {{ color: red; }}

<!-- end snippet -->"""


@pytest.fixture
def md():
    return make_parser()


@pytest.fixture
def example():
    return EXAMPLE


@pytest.fixture
def begin_line():
    return BEGIN
