import os
import tempfile
import unittest
import unittest.mock
from pathlib import Path

from devenvctl.lib.core import config as cfg
from devenvctl.lib.core.paths import config_root, state_root


class GlobalConfigTests(unittest.TestCase):
    def test_search_paths_env_override(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "config.yml"
            with unittest.mock.patch.dict(os.environ, {"DEVENVCTL_CONFIG_FILE": str(cfg_path)}):
                self.assertEqual(cfg.global_config_search_paths(), [cfg_path.resolve()])

    def test_config_dir_override_is_first_search_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            config_file = Path(td) / "config.yml"
            config_file.write_text("compose:\n  service: box\n", encoding="utf-8")
            env = {k: v for k, v in os.environ.items() if k != "DEVENVCTL_CONFIG_FILE"}
            env["DEVENVCTL_CONFIG_DIR"] = td
            with unittest.mock.patch.dict(os.environ, env, clear=True):
                self.assertEqual(config_root(), Path(td))
                self.assertEqual(cfg.global_config_path(), config_file.resolve())

    def test_state_root_env_override(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with unittest.mock.patch.dict(os.environ, {"DEVENVCTL_STATE_DIR": td}):
                self.assertEqual(state_root(), Path(td))

    def test_missing_or_malformed_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "config.yml"
            with unittest.mock.patch.dict(os.environ, {"DEVENVCTL_CONFIG_FILE": str(cfg_path)}):
                self.assertEqual(cfg.load_global_config(), {})
                cfg_path.write_text("- just\n- a list\n", encoding="utf-8")
                self.assertEqual(cfg.load_global_config(), {})

    def test_non_dict_section_is_empty(self) -> None:
        self.assertEqual(cfg.get_global_section({"git": "oops"}, "git"), {})
        self.assertEqual(cfg.get_global_section({}, "git"), {})


class LoadSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = cfg.load_settings(env={"HOME": "/home/dev"}, cfg={})

        self.assertEqual(settings.workspace_dir, Path("/home/dev/dev"))
        self.assertEqual(settings.project_name, "default")
        self.assertFalse(settings.skip_github_check)
        self.assertEqual(settings.ssh_source_dir, Path("/home/dev/.ssh"))
        self.assertEqual(settings.ssh_writable_dir, Path("/home/dev/.ssh-container"))
        self.assertEqual(settings.key_types, ("id_ed25519", "id_rsa", "id_ecdsa"))
        self.assertEqual(settings.fetch_dir, Path("/tmp/devcontainer-setup"))
        self.assertEqual(settings.container_name, "devcontainer-default")
        self.assertEqual(settings.registration_url, "https://github.com/settings/keys")

    def test_skip_flag_accepts_only_true_spellings(self) -> None:
        for value, expected in (("true", True), ("TRUE", True), ("1", True), ("false", False), ("", False)):
            with self.subTest(value=value):
                settings = cfg.load_settings(env={"HOME": "/h", "SKIP_GITHUB_CHECK": value}, cfg={})
                self.assertIs(settings.skip_github_check, expected)

    def test_environment_wins_over_config_file(self) -> None:
        config = {
            "paths": {"workspace_dir": "/srv/code"},
            "source": {"url": "https://example.com/from-config.git"},
            "github": {"skip_check": True, "host": "git.example.com"},
        }
        env = {
            "HOME": "/h",
            "DEV_DIR": "/work",
            "DEVENV_SOURCE_URL": "https://example.com/from-env.git",
            "SKIP_GITHUB_CHECK": "false",
        }
        settings = cfg.load_settings(env=env, cfg=config)

        self.assertEqual(settings.workspace_dir, Path("/work"))
        self.assertEqual(settings.source_url, "https://example.com/from-env.git")
        self.assertFalse(settings.skip_github_check)
        self.assertEqual(settings.identity_host, "git.example.com")
        self.assertEqual(settings.registration_url, "https://git.example.com/settings/keys")

    def test_config_file_values(self) -> None:
        config = {
            "ssh": {"key_types": ["id_rsa"], "timeout": 3, "source_dir": "/mnt/keys"},
            "git": {"work_email": "me@corp.example", "sentinel_host": "intranet", "probe_timeout": 2},
            "dotfiles": {"repo": "git@example.com:me/dots.git"},
            "session": {"shell": "/bin/bash"},
        }
        settings = cfg.load_settings(env={"HOME": "/h"}, cfg=config)

        self.assertEqual(settings.key_types, ("id_rsa",))
        self.assertEqual(settings.ssh_timeout, 3)
        self.assertEqual(settings.ssh_source_dir, Path("/mnt/keys"))
        self.assertEqual(settings.work_email, "me@corp.example")
        self.assertEqual(settings.sentinel_host, "intranet")
        self.assertEqual(settings.probe_timeout, 2)
        self.assertEqual(settings.dotfiles_repo, "git@example.com:me/dots.git")
        self.assertEqual(settings.shell, "/bin/bash")

    def test_for_project(self) -> None:
        settings = cfg.load_settings(env={"HOME": "/h"}, cfg={})
        self.assertEqual(settings.for_project("web").container_name, "devcontainer-web")
        self.assertEqual(settings.for_project("").project_name, "default")
        self.assertEqual(settings.project_name, "default")
