# -*- coding: utf-8 -*-

import logging
import os
import tempfile

import pyitip

from pyitip.conf import Conf
from pyitip.logger import Logger
from pyitip.logger import scan_argv
from twisted.trial import unittest


class TestConf(unittest.TestCase):
    config_file = None

    def setUp(self):
        self.config_file = self._write_config(
                '[itip]\n'
                'counter_ignored_properties = location, description\n'
                'windows_timezones = false\n'
            )

        self.conf = Conf()

    def _write_config(self, content):
        (fp, config_file) = tempfile.mkstemp()
        os.write(fp, content.encode('utf-8'))
        os.close(fp)

        self.addCleanup(os.remove, config_file)

        return config_file

    def test_001_defaults(self):
        self.conf.read_config('/nonexistent/pyitip.conf')

        self.assertEqual(self.conf.get('itip', 'default_locale', quiet=True), 'en_US')
        self.assertEqual(self.conf.get('itip', 'default_timezone', quiet=True), 'UTC')
        self.assertEqual(self.conf.get_list('itip', 'icloud_domains'), ['icloud.com', 'me.com', 'mac.com'])
        self.assertEqual(self.conf.get_list('itip', 'counter_ignored_properties'), [])
        self.assertTrue(self.conf.get_bool('itip', 'windows_timezones'))

    def test_002_config_file(self):
        self.conf.read_config(self.config_file)

        self.assertEqual(self.conf.get_list('itip', 'counter_ignored_properties'), ['location', 'description'])
        self.assertFalse(self.conf.get_bool('itip', 'windows_timezones'))
        self.assertTrue(self.conf.has_option('itip', 'windows_timezones'))
        self.assertFalse(self.conf.has_section('ldap'))

    def test_003_unknown_option(self):
        self.conf.read_config(self.config_file)

        self.assertEqual(self.conf.get('itip', 'no_such_option', 'fallback', quiet=True), 'fallback')

    def test_004_finalize_conf(self):
        self.addCleanup(setattr, Logger, 'debuglevel', Logger.debuglevel)
        self.addCleanup(setattr, Logger, 'loglevel', Logger.loglevel)
        self.addCleanup(setattr, Logger, 'logfile', Logger.logfile)

        self.conf.finalize_conf(['-c', self.config_file, '-d', '3'])

        self.assertEqual(self.conf.config_file, self.config_file)
        self.assertEqual(self.conf.debuglevel, 3)
        self.assertFalse(self.conf.get_bool('itip', 'windows_timezones'))

        self.assertEqual(Logger.debuglevel, 3)
        self.assertEqual(Logger.loglevel, logging.DEBUG)

    def test_005_thread_conf(self):
        self.addCleanup(pyitip.setConf, pyitip.conf)

        self.conf.read_config(self.config_file)
        pyitip.setConf(self.conf)

        self.assertIdentical(pyitip.getConf(), self.conf)
        self.assertEqual(pyitip.getConf().get_list('itip', 'counter_ignored_properties'), ['location', 'description'])

    def test_006_typed_settings(self):
        config_file = self._write_config(
                '[itip]\n'
                'icloud_domains = iCloud.com,me.com mac.com\n'
                'windows_timezones = no\n'
                'default_locale = de_DE\n'
            )

        self.conf.read_config(config_file)

        self.assertEqual(self.conf.settings[('itip', 'icloud_domains')], ['icloud.com', 'me.com', 'mac.com'])
        self.assertIdentical(self.conf.settings[('itip', 'windows_timezones')], False)
        self.assertEqual(self.conf.get('itip', 'default_locale'), 'de_DE')

    def test_007_invalid_settings(self):
        config_file = self._write_config(
                '[itip]\n'
                'default_timezone = Mars/Olympus_Mons\n'
                'windows_timezones = maybe\n'
            )

        self.conf.read_config(config_file)

        self.assertEqual(self.conf.get('itip', 'default_timezone'), 'UTC')
        self.assertTrue(self.conf.get_bool('itip', 'windows_timezones'))

    def test_008_reread_config(self):
        self.conf.read_config(self.config_file)
        self.conf.read_config('/nonexistent/pyitip.conf')

        self.assertTrue(self.conf.get_bool('itip', 'windows_timezones'))

    def test_009_check_setting_debuglevel(self):
        self.assertFalse(self.conf.check_setting_debuglevel(-1))
        self.assertTrue(self.conf.check_setting_debuglevel(9))
        self.assertFalse(self.conf.check_setting_config_file('/nonexistent/pyitip.conf'))


class TestLogger(unittest.TestCase):
    def test_001_scan_argv(self):
        self.assertEqual(scan_argv(['prog']), (0, logging.CRITICAL))
        self.assertEqual(scan_argv(['prog', '-d', '8']), (8, logging.DEBUG))
        self.assertEqual(scan_argv(['prog', '-l', 'warning']), (0, logging.WARNING))
        self.assertEqual(scan_argv(['prog', '-d', 'x']), (0, logging.CRITICAL))

    def test_002_debug_level(self):
        self.patch(Logger, 'debuglevel', 3)
        self.patch(Logger, 'loglevel', logging.DEBUG)

        log = Logger('pyitip.test', logfile='/nonexistent/pyitip.log')
        log.remove_stdout_handler()

        records = []

        class Collector(logging.Handler):
            def emit(self, record):
                records.append(record.getMessage())

        log.addHandler(Collector())

        log.debug("shown", level=3)
        log.debug("hidden", level=4)

        self.assertEqual(records, ["shown"])
