import os
import pytest
from unittest.mock import MagicMock

from ogscrape import config as config_module


ARTICLE_HTML = """<!DOCTYPE html>
<html xmlns:og="http://opengraphprotocol.org/schema/">
<head>
  <title>The Rock (1996)</title>
  <meta property="og:title" content="The Rock">
  <meta property="og:type" content="video.movie">
  <meta property="og:url" content="http://www.imdb.com/title/tt0117500/">
  <meta property="og:image" content="http://ia.media-imdb.com/images/rock.jpg">
  <meta property="og:image:width" content="400">
  <meta property="og:image:height" content="300">
  <meta name="description" content="Not an Open Graph tag">
</head>
<body><img src="/banner.png" width="10"></body>
</html>"""


PLAIN_HTML = """<html>
<head><title>Plain page</title></head>
<body>
  <img src="/first.png" width="640" height="480">
  <img src="/second.png">
</body>
</html>"""


@pytest.fixture
def article_html():
    """Page declaring the og namespace with a typical set of properties."""
    return ARTICLE_HTML


@pytest.fixture
def plain_html():
    """Page without any Open Graph markup."""
    return PLAIN_HTML


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""
    def _make(status_code=200, text="", url="http://example.com/"):
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        response.url = url
        response.headers = {"Content-Type": "text/html; charset=utf-8"}
        return response
    return _make


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep user/local config files and OGSCRAPE_* variables out of tests."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("OGSCRAPE_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr(config_module, "_config", None)
    yield
