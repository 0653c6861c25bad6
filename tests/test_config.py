import os
import json
import shutil
import tempfile
import toml
import unittest
from click.testing import CliRunner
from spotbuilder import config
from spotbuilder.commands.config import config as config_command

class TestConfig(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, config.CONFIG_FILE)
        self.sample_config = {
            "player": {
                "source_dir": "/opt/spotify-player",
                "binary": "spotify_player"
            },
            "owner": "Test Owner"
        }
        config.save_config(self.sample_config, path=self.test_dir)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_config_not_found(self):
        """Test that loading a non-existent config returns an empty dict."""
        os.remove(self.config_path)
        self.assertEqual(config.load_config(path=self.test_dir), {})

    def test_load_config_invalid_toml(self):
        with open(self.config_path, "w") as f:
            f.write("[player\nbinary = ")
        self.assertEqual(config.load_config(path=self.test_dir), {})

    def test_save_and_load_config(self):
        """Test saving a config and then loading it back."""
        loaded_config = config.load_config(path=self.test_dir)
        self.assertEqual(loaded_config, self.sample_config)
        with open(self.config_path, "r") as f:
            self.assertEqual(toml.load(f), self.sample_config)

    def test_get_setting_falls_back_to_defaults(self):
        conf = config.load_config(path=self.test_dir)
        self.assertEqual(config.get_setting(conf, "player.source_dir"), "/opt/spotify-player")
        self.assertEqual(config.get_setting(conf, "launch.session_name"), "spotify_player")
        self.assertEqual(config.get_setting({}, "player.crate_path"), "spotify_player")
        with self.assertRaises(KeyError):
            config.get_setting(conf, "launch.nonexistent")

    def test_default_config_is_a_copy(self):
        defaults = config.get_default_config()
        defaults["player"]["binary"] = "changed"
        self.assertEqual(config.DEFAULT_CONFIG["player"]["binary"], "spotify_player")

    def test_resolve_path(self):
        self.assertEqual(config.resolve_path("/abs/dir", "/base"), "/abs/dir")
        self.assertEqual(config.resolve_path("rel", "/base"), os.path.join("/base", "rel"))
        self.assertEqual(config.resolve_path("~/x", "/base"), os.path.join(os.path.expanduser("~"), "x"))

    def test_get_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['get', 'owner'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), 'Test Owner')

    def test_get_default_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['get', 'launch.term'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), 'xterm-256color')

    def test_get_non_existent_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['get', 'player.nonexistent'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertIn("Error: Key 'player.nonexistent' not found", result.output)

    def test_set_nested_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['set', 'launch.mode', 'ghostty'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(config.load_config(path=self.test_dir)['launch']['mode'], 'ghostty')

    def test_unset_nested_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['unset', 'player.binary'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertNotIn('binary', config.load_config(path=self.test_dir)['player'])

    def test_list_config(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['list'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(json.loads(result.output.strip()), self.sample_config)

    def test_list_config_with_defaults(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['list', '--defaults'], obj={"path": self.test_dir})
        listed = json.loads(result.output.strip())
        self.assertEqual(listed['player']['source_dir'], "/opt/spotify-player")
        self.assertEqual(listed['player']['crate_path'], "spotify_player")
        self.assertEqual(listed['launch']['mode'], "terminal")
        self.assertEqual(listed['owner'], "Test Owner")

if __name__ == "__main__":
    unittest.main()
