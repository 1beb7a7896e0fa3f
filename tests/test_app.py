import pytest

try:
    import vlc  # noqa: F401
except (ImportError, OSError, NotImplementedError) as exc:  # libvlc missing on the host
    pytest.skip(f"python-vlc unavailable: {exc}", allow_module_level=True)

from config import i18n
from core.config import ConfigManager
from main import TVBrowseApp, parse_args


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(i18n, "LANG", "es")
    monkeypatch.delenv("TVBROWSE_LANG", raising=False)
    monkeypatch.setenv("TVBROWSE_DISABLE_COOKIES", "1")


def test_env_language_survives_default_config(monkeypatch, tmp_path):
    monkeypatch.setenv("TVBROWSE_LANG", "en")

    TVBrowseApp(ConfigManager(str(tmp_path / "cfg")))

    assert i18n.get_language() == "en"


def test_lang_flag_applies_for_this_run_only(tmp_path):
    config_dir = str(tmp_path / "cfg")
    args = parse_args(["--config-dir", config_dir, "--lang", "en"])

    TVBrowseApp(ConfigManager(args.config_dir), lang=args.lang)

    assert i18n.get_language() == "en"
    assert ConfigManager(config_dir).get("ui.language") == "es"
