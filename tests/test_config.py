import os
import unittest
from unittest import mock

from bizmetrics.config.env import get_chat_config, get_relay_config, get_supabase_config
from bizmetrics.config.settings import settings


class TestEnvConfig(unittest.TestCase):
    def test_supabase_prefers_plain_names(self):
        env = {
            "SUPABASE_URL": "https://a.supabase.co",
            "NEXT_PUBLIC_SUPABASE_URL": "https://b.supabase.co",
            "NEXT_PUBLIC_SUPABASE_ANON_KEY": "anon",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            cfg = get_supabase_config()
        self.assertEqual(cfg.url, "https://a.supabase.co")
        self.assertEqual(cfg.anon_key, "anon")
        self.assertTrue(cfg.configured)
        self.assertEqual(cfg.timeout_s, 15.0)

    def test_supabase_unconfigured(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertFalse(get_supabase_config().configured)

    def test_chat_and_relay(self):
        env = {"PERPLEXITY_API_KEY": "k", "CHAT_RELAY_PORT": "9000"}
        with mock.patch.dict(os.environ, env, clear=True):
            chat = get_chat_config()
            relay = get_relay_config()
        self.assertEqual(chat.api_key, "k")
        self.assertEqual(chat.model, "sonar-reasoning-pro")
        self.assertEqual(relay.port, 9000)
        self.assertEqual(relay.host, "0.0.0.0")


class TestSettings(unittest.TestCase):
    def test_cost_constants(self):
        self.assertEqual(settings.LABOR_RATE, 35.0)
        self.assertEqual(settings.OVERHEAD_PER_UNIT, 250.0)
        self.assertEqual(settings.OPEX_REVENUE_RATE, 0.20)
        self.assertEqual(settings.FIXED_OPEX, 100_000.0)
        self.assertEqual(settings.MAX_COMPARE_SCENARIOS, 4)

    def test_paths_under_project_root(self):
        self.assertEqual(settings.PROCESSED_DIR.parent, settings.DATA_DIR)
        self.assertEqual(settings.DATA_DIR.parent, settings.PROJECT_ROOT)


if __name__ == "__main__":
    unittest.main()
