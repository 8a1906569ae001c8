"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def workspace(temp_dir):
    """
    Create a workspace tree with mixed file types.

    Returns:
        dict with paths to:
        - root: the workspace directory
        - target: images/red.png
        - copy: backup/red_copy.png (byte copy of target)
        - nested_copy: deep/a/b/red.PNG (byte copy, upper-case extension)
        - unique: images/blue.png
        - jpeg: images/green.jpg
        - text: notes.txt (not an image)
        - hidden_copy: .cache/red.png (byte copy inside hidden dir)
        - modules_copy: node_modules/pkg/red.png (byte copy inside node_modules)
    """
    root = temp_dir / "workspace"
    paths = {'root': root}

    def make(relative):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    red = Image.new('RGB', (40, 30), color='red')
    target = make("images/red.png")
    red.save(target, 'PNG')
    paths['target'] = target

    data = target.read_bytes()
    for key, relative in [
        ('copy', "backup/red_copy.png"),
        ('nested_copy', "deep/a/b/red.PNG"),
        ('hidden_copy', ".cache/red.png"),
        ('modules_copy', "node_modules/pkg/red.png"),
    ]:
        path = make(relative)
        path.write_bytes(data)
        paths[key] = path

    blue = make("images/blue.png")
    Image.new('RGB', (40, 30), color='blue').save(blue, 'PNG')
    paths['unique'] = blue

    green = make("images/green.jpg")
    Image.new('RGB', (20, 20), color='green').save(green, 'JPEG')
    paths['jpeg'] = green

    text = make("notes.txt")
    text.write_text("not an image")
    paths['text'] = text

    return paths


@pytest.fixture
def lonely_image(temp_dir):
    """A workspace whose only image has no copies."""
    root = temp_dir / "lonely"
    root.mkdir()
    path = root / "only.png"
    Image.new('RGB', (10, 10), color='purple').save(path, 'PNG')
    return {'root': root, 'target': path}


@pytest.fixture
def scan_config():
    """Factory for ScanConfiguration objects rooted at a workspace."""
    from dupecheck.models import ScanConfiguration

    def factory(root, **kwargs):
        return ScanConfiguration(workspace_roots=(str(root),), **kwargs)

    return factory


@pytest.fixture(autouse=True)
def isolated_user_config(monkeypatch, tmp_path_factory):
    """Keep tests away from the real ~/.dupecheck and DUPECHECK_* variables."""
    from dupecheck.user_config import get_user_config

    for name in ('DUPECHECK_IMAGE_EXTENSIONS', 'DUPECHECK_SEARCH_PATHS',
                 'DUPECHECK_SEARCH_MODE', 'DUPECHECK_WORKERS'):
        monkeypatch.delenv(name, raising=False)
    config_dir = tmp_path_factory.mktemp("dupecheck-config")
    monkeypatch.setenv('DUPECHECK_CONFIG_DIR', str(config_dir))

    config = get_user_config()
    config.reload()
    yield config_dir
    config.reload()
