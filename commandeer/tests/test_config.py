#!/usr/bin/env python3
"""
Configuration and Logging Unit Tests

Author: Commandeer Developers
Version: 1.0.0
"""

import json
import os
import tempfile
import unittest

from commandeer.core.config_loader import Config, ConfigLoader, get_config
from commandeer.exceptions import ConfigError, ConfigValidationError
from commandeer.filesystem import VirtualFileSystem
from commandeer.logger import Logger, LogLevel, get_logger


class TestConfigLoader(unittest.TestCase):
    """Test JSON configuration loading."""

    def setUp(self):
        self.loader = ConfigLoader()
        self.loader.reset()
        self._tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.loader.reset()
        self._tmpdir.cleanup()

    def write_config(self, data, raw=None) -> str:
        path = os.path.join(self._tmpdir.name, 'config.json')
        with open(path, 'w', encoding='utf-8') as f:
            f.write(raw if raw is not None else json.dumps(data))
        return path

    def test_singleton(self):
        """Every ConfigLoader() is the same object."""
        self.assertIs(ConfigLoader(), self.loader)

    def test_defaults(self):
        """Defaults apply until a file is loaded."""
        config = get_config()
        self.assertFalse(self.loader.loaded)
        self.assertTrue(config.filesystem.seed_sample)
        self.assertEqual(config.filesystem.protected_paths, ['/home'])
        self.assertEqual(config.logging.level, 'WARNING')
        self.assertEqual(config.search.limit, 200)

    def test_load(self):
        """Values from the file override the defaults section by section."""
        path = self.write_config({
            'filesystem': {'seed_sample': False, 'protected_paths': ['/srv']},
            'shell': {'hostname': 'box'},
        })

        config = self.loader.load(path)

        self.assertTrue(self.loader.loaded)
        self.assertFalse(config.filesystem.seed_sample)
        self.assertEqual(config.filesystem.protected_paths, ['/srv'])
        self.assertEqual(config.shell.hostname, 'box')
        self.assertEqual(config.shell.user, 'user')
        self.assertIs(get_config(), config)

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            self.loader.load(os.path.join(self._tmpdir.name, 'absent.json'))

    def test_invalid_json(self):
        path = self.write_config(None, raw='{"shell": ')
        with self.assertRaises(ConfigError):
            self.loader.load(path)

    def test_root_must_be_object(self):
        path = self.write_config([1, 2])
        with self.assertRaises(ConfigValidationError):
            self.loader.load(path)

    def test_unknown_key(self):
        path = self.write_config({'shell': {'colour': 'red'}})
        with self.assertRaises(ConfigValidationError) as ctx:
            self.loader.load(path)
        self.assertEqual(ctx.exception.key, 'shell.colour')

    def test_wrong_type(self):
        """Booleans are not accepted where integers are expected."""
        path = self.write_config({'search': {'limit': True}})
        with self.assertRaises(ConfigValidationError):
            self.loader.load(path)

    def test_non_positive_counts_rejected(self):
        """History size and search limit must be at least 1."""
        for section, key, value in (('shell', 'history_size', 0), ('search', 'limit', -3)):
            path = self.write_config({section: {key: value}})
            with self.assertRaises(ConfigValidationError) as ctx:
                self.loader.load(path)
            self.assertEqual(ctx.exception.key, f"{section}.{key}")

        with self.assertRaises(ConfigValidationError):
            self.loader.set('shell.history_size', 0)
        self.assertEqual(self.loader.get('shell.history_size'), 1000)

    def test_nullable_string(self):
        path = self.write_config({'logging': {'log_file': None}})
        self.assertIsNone(self.loader.load(path).logging.log_file)

    def test_failed_load_keeps_previous(self):
        """A bad file does not clobber the current settings."""
        self.loader.set('shell.hostname', 'kept')
        path = self.write_config({'shell': {'history_size': 'lots'}})

        with self.assertRaises(ConfigValidationError):
            self.loader.load(path)
        self.assertEqual(self.loader.get('shell.hostname'), 'kept')

    def test_get_and_set(self):
        self.loader.set('search.limit', 5)
        self.assertEqual(self.loader.get('search.limit'), 5)
        self.assertEqual(self.loader.get('search.nothing', 'fallback'), 'fallback')

        with self.assertRaises(ConfigValidationError):
            self.loader.set('search.limit', 'five')
        with self.assertRaises(ConfigValidationError):
            self.loader.set('nothing.here', 1)

    def test_to_dict(self):
        data = self.loader.to_dict()
        self.assertEqual(data['shell']['history_size'], 1000)
        self.assertEqual(data['filesystem']['protected_paths'], ['/home'])

    def test_vfs_from_config(self):
        """The filesystem honours seeding and protection settings."""
        config = Config()
        config.filesystem.seed_sample = False
        config.filesystem.protected_paths = ['/keep']

        vfs = VirtualFileSystem.from_config(config)

        self.assertEqual(vfs.enumerate_all_paths(), ['/'])
        vfs.create('/keep', 'directory')
        self.assertFalse(vfs.remove('/keep'))


class TestLogger(unittest.TestCase):
    """Test the subsystem logger."""

    def setUp(self):
        Logger.reset()
        Logger.initialize(level=LogLevel.DEBUG, console_output=False)

    def tearDown(self):
        Logger.reset()

    def test_one_instance_per_subsystem(self):
        self.assertIs(get_logger('filesystem'), Logger('filesystem'))
        self.assertIsNot(get_logger('filesystem'), get_logger('shell'))

    def test_buffer_records_context(self):
        """Structured context travels with each record."""
        get_logger('search').warning("Provider failed", context={'query': 'x'})

        logs = Logger.get_recent_logs(level='WARNING', subsystem='search')
        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['message'], "Provider failed")
        self.assertEqual(logs[0]['context'], {'query': 'x'})

    def test_filesystem_failures_logged(self):
        """Expected failures are logged at debug with the operation name."""
        vfs = VirtualFileSystem()
        vfs.remove('/missing')

        logs = Logger.get_recent_logs(level='DEBUG', subsystem='filesystem')
        self.assertTrue(any(l['context'].get('operation') == 'remove' for l in logs))

    def test_level_from_name(self):
        self.assertEqual(LogLevel.from_name('info'), LogLevel.INFO)
        with self.assertRaises(ValueError):
            LogLevel.from_name('loud')


if __name__ == '__main__':
    unittest.main()
