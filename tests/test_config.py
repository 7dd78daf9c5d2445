from seqhealth.config import Settings, is_feature_enabled, read_run_config


def _write_config(run_dir, text: str, name: str = "logs/run.config"):
    path = run_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("SEQHEALTH_LENIENT", raising=False)
    monkeypatch.delenv("SEQHEALTH_RUN_CONFIG", raising=False)
    settings = Settings.from_env()
    assert settings.strict
    assert settings.run_config_name == "logs/run.config"
    assert settings.health_check_log == "logs/HealthCheck.out"


def test_settings_from_env_and_overrides(monkeypatch):
    monkeypatch.setenv("SEQHEALTH_LENIENT", "true")
    monkeypatch.setenv("SEQHEALTH_RUN_CONFIG", "settings.ini")
    settings = Settings.from_env()
    assert settings.lenient
    assert settings.run_config_name == "settings.ini"
    assert Settings.from_env(lenient=False).strict
    # None overrides are ignored
    assert Settings.from_env(lenient=None).lenient


def test_read_run_config_without_sections(tmp_path):
    _write_config(tmp_path, "# pipeline switches\nMAPPING\tyes\nqcstats = no\nSOMVAR=yes\n")
    config = read_run_config(tmp_path)
    assert config == {"MAPPING": "yes", "QCSTATS": "no", "SOMVAR": "yes"}


def test_read_run_config_with_sections(tmp_path):
    _write_config(tmp_path, "[features]\nMAPPING = true\n[other]\nKINSHIP = off\n")
    config = read_run_config(tmp_path)
    assert config["MAPPING"] == "true"
    assert config["KINSHIP"] == "off"


def test_read_run_config_missing_file(tmp_path):
    assert read_run_config(tmp_path) == {}


def test_is_feature_enabled(tmp_path):
    _write_config(tmp_path, "MAPPING\tyes\nQCSTATS\tno\nKINSHIP = 1\n")
    assert is_feature_enabled("MAPPING", tmp_path)
    assert is_feature_enabled("mapping", tmp_path)
    assert is_feature_enabled("KINSHIP", tmp_path)
    assert not is_feature_enabled("QCSTATS", tmp_path)
    assert not is_feature_enabled("SOMVAR", tmp_path)


def test_is_feature_enabled_custom_config_name(tmp_path):
    _write_config(tmp_path, "MAPPING = yes\n", name="settings.ini")
    settings = Settings(run_config_name="settings.ini")
    assert is_feature_enabled("MAPPING", tmp_path, settings)
    assert not is_feature_enabled("MAPPING", tmp_path)
