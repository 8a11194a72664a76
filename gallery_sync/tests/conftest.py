"""Shared test fixtures for the gallery sync tests."""

from unittest.mock import MagicMock

import pytest


GALLERY_PAGE = """
<!DOCTYPE html>
<html>
<body>
  <section class="gallery">
    <div class="gallery-item" data-type="WEDDING" data-sizes="XS, s,xl" data-price="299">
      <img src="images/white-lace.jpg" alt="Elegant Wedding Dress">
      <p class="price">$350</p>
    </div>
    <div class="gallery-item" data-type="bogus">
      <img src="images/red-silk.jpg" alt="">
      <p>Cocktail Classic</p>
      <p class="price">$199</p>
    </div>
    <div class="gallery-item">
    </div>
  </section>
</body>
</html>
"""


LATIN1_PAGE = """
<!DOCTYPE html>
<html>
<head><meta charset="iso-8859-1"></head>
<body>
  <div class="gallery-item" data-type="evening">
    <img src="images/robe.jpg" alt="Robe décolletée">
  </div>
</body>
</html>
"""


SYNC_ENV_VARS = (
    "ADMIN_TOKEN",
    "ADMIN_PASSWORD",
    "API_BASE",
    "FRONTEND_DIR",
    "SYNC_REQUEST_TIMEOUT",
)


@pytest.fixture
def gallery_html():
    """A small gallery page with three items."""
    return GALLERY_PAGE


@pytest.fixture
def gallery_file(tmp_path):
    """Write the sample gallery page to a temporary .html file."""
    path = tmp_path / "gallerypage.html"
    path.write_text(GALLERY_PAGE, encoding="utf-8")
    return path


@pytest.fixture
def latin1_gallery_file(tmp_path):
    """A gallery page saved as ISO-8859-1 with a non-ASCII dress name."""
    path = tmp_path / "robes.html"
    path.write_bytes(LATIN1_PAGE.encode("latin-1"))
    return path


@pytest.fixture
def mock_session():
    """A requests.Session stand-in whose POST answers 200."""
    session = MagicMock()
    session.headers = {}
    response = MagicMock()
    response.status_code = 200
    response.text = '{"message": "seeded"}'
    session.post.return_value = response
    return session


@pytest.fixture
def clean_env(monkeypatch):
    """Remove sync-related environment variables.

    Each one is set before it is removed so monkeypatch restores the
    original state even when a test loads the variable from a .env file.
    """
    for name in SYNC_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
