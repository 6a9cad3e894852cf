from pathlib import Path

from run_notifier.runtime.artifacts import container_dir, default_store_root


def test_default_store_root_is_local_blobs_dir_when_env_unset(tmp_path, monkeypatch):
    monkeypatch.delenv("RUN_NOTIFIER_STORE_ROOT", raising=False)
    monkeypatch.chdir(tmp_path)

    assert default_store_root() == tmp_path / ".blobs"


def test_default_store_root_uses_env_var(tmp_path, monkeypatch):
    env_root = tmp_path / "custom_root"
    monkeypatch.setenv("RUN_NOTIFIER_STORE_ROOT", str(env_root))

    assert default_store_root() == env_root


def test_container_dir_accepts_file_urls_and_plain_paths(tmp_path):
    assert container_dir(tmp_path.as_uri()) == tmp_path
    assert container_dir(str(tmp_path)) == tmp_path


def test_container_dir_mirrors_remote_urls_under_store_root(tmp_path):
    result = container_dir("https://acct.blob.core.windows.net/results/", store_root=tmp_path)

    assert result == tmp_path / "acct.blob.core.windows.net" / "results"
    assert isinstance(result, Path)


def test_container_dir_falls_back_to_env_store_root(tmp_path, monkeypatch):
    monkeypatch.setenv("RUN_NOTIFIER_STORE_ROOT", str(tmp_path))

    result = container_dir("https://acct.blob.core.windows.net/results")

    assert result == tmp_path / "acct.blob.core.windows.net" / "results"
