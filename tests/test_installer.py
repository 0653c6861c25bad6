import os
import shutil
import tempfile
import unittest
from unittest.mock import patch, MagicMock
from spotbuilder import installer
from spotbuilder.features import AudioBackend, OperatingSystemKind, PlatformFacts

LINUX_ALSA = PlatformFacts(OperatingSystemKind.LINUX, False, True, False)


def _stream(lines, returncode):
    return iter(lines), MagicMock(returncode=returncode)


class TestInstaller(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    @patch("spotbuilder.installer.run_shell_command")
    def test_clone_repository_reuses_existing_checkout(self, mock_run):
        self.assertTrue(installer.clone_repository("https://example.com/repo.git", self.test_dir))
        mock_run.assert_not_called()

    @patch("spotbuilder.installer.run_shell_command")
    def test_clone_repository(self, mock_run):
        mock_run.return_value = _stream(["Cloning into 'repo'...\n"], 0)
        dest = os.path.join(self.test_dir, "repo")
        self.assertTrue(installer.clone_repository("https://example.com/repo.git", dest))
        mock_run.assert_called_once_with(["git", "clone", "https://example.com/repo.git", dest], stream_output=True)

    @patch("spotbuilder.installer.run_shell_command")
    def test_clone_repository_failure(self, mock_run):
        mock_run.return_value = _stream([], 128)
        self.assertFalse(installer.clone_repository("https://example.com/repo.git", os.path.join(self.test_dir, "repo")))

    def test_build_command(self):
        command = installer.build_command("/src/spotify-player", "spotify_player", "rodio-backend,image")
        self.assertEqual(command, [
            "cargo", "install",
            "--path", os.path.join("/src/spotify-player", "spotify_player"),
            "--no-default-features",
            "--features", "rodio-backend,image",
        ])

    @patch("spotbuilder.installer.run_shell_command")
    def test_build_player_reports_exit_code(self, mock_run):
        mock_run.return_value = _stream(["   Compiling spotify_player\n"], 0)
        self.assertTrue(installer.build_player("/src", "spotify_player", "alsa-backend"))
        mock_run.return_value = _stream(["error: could not compile\n"], 101)
        self.assertFalse(installer.build_player("/src", "spotify_player", "alsa-backend"))

    @patch("spotbuilder.installer.build_player", return_value=True)
    @patch("spotbuilder.installer.clone_repository", return_value=True)
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_install_player_uses_resolved_features(self, mock_facts, mock_clone, mock_build):
        conf = {"player": {"source_dir": "checkout"}}
        self.assertTrue(installer.install_player(conf, path=self.test_dir))
        source_dir = os.path.join(os.path.abspath(self.test_dir), "checkout")
        mock_clone.assert_called_once_with("https://github.com/bbzylstra/spotify-player.git", source_dir, verbose=False)
        mock_build.assert_called_once_with(source_dir, "spotify_player",
                                           "alsa-backend,pixelate,streaming,media-control,image", verbose=False)

    @patch("spotbuilder.installer.build_player", return_value=True)
    @patch("spotbuilder.installer.clone_repository", return_value=True)
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_install_player_backend_override(self, mock_facts, mock_clone, mock_build):
        self.assertTrue(installer.install_player({}, path=self.test_dir, backend=AudioBackend.PULSEAUDIO))
        self.assertEqual(mock_build.call_args[0][2], "pulseaudio-backend,pixelate,streaming,media-control,image")

    @patch("spotbuilder.installer.logger")
    @patch("spotbuilder.installer.build_player", return_value=False)
    @patch("spotbuilder.installer.clone_repository", return_value=True)
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_install_player_build_failure(self, mock_facts, mock_clone, mock_build, mock_logger):
        self.assertFalse(installer.install_player({}, path=self.test_dir))
        mock_logger.error.assert_called_once_with("Installation failed. Please check the error messages above.")
        mock_logger.success.assert_not_called()

    @patch("spotbuilder.installer.build_player")
    @patch("spotbuilder.installer.clone_repository", return_value=False)
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_install_player_clone_failure_skips_build(self, mock_facts, mock_clone, mock_build):
        self.assertFalse(installer.install_player({}, path=self.test_dir))
        mock_build.assert_not_called()


class TestCheckEnvironment(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.conf = {"image": {"app_config": os.path.join(self.test_dir, "app.toml")}}

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    @patch("spotbuilder.installer.shutil.which", side_effect=lambda tool: f"/usr/bin/{tool}")
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_all_tools_present(self, mock_facts, mock_which):
        self.assertTrue(installer.check_environment(self.conf, path=self.test_dir))

    @patch("spotbuilder.installer.logger")
    @patch("spotbuilder.installer.shutil.which", side_effect=lambda tool: None if tool == "cargo" else f"/usr/bin/{tool}")
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_missing_cargo(self, mock_facts, mock_which, mock_logger):
        self.assertFalse(installer.check_environment(self.conf, path=self.test_dir))
        mock_logger.warning.assert_any_call("'cargo' is not installed or not on PATH.")

    @patch("spotbuilder.installer.shutil.which", side_effect=lambda tool: f"/usr/bin/{tool}")
    @patch("spotbuilder.installer.gather_platform_facts", return_value=LINUX_ALSA)
    def test_ghostty_tmux_mode_on_linux(self, mock_facts, mock_which):
        self.conf["launch"] = {"mode": "ghostty-tmux"}
        self.assertFalse(installer.check_environment(self.conf, path=self.test_dir))

if __name__ == "__main__":
    unittest.main()
