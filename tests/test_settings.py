from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from cineclube_signup.settings import load_settings


class SettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch("cineclube_signup.settings.load_dotenv"), patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        self.assertEqual(settings.api_port, 3000)
        self.assertEqual(settings.subscribers_file, "subscribers.csv")
        self.assertEqual(settings.logs_dir, "logs")
        self.assertEqual(settings.smtp.host, "smtp.example.com")
        self.assertEqual(settings.smtp.port, 587)
        self.assertEqual(settings.smtp.from_address, "Turing Cineclube <noreply@exemplo.com>")

    def test_environment_overrides(self) -> None:
        env = {
            "PORT": "8080",
            "SMTP_HOST": "mail.local",
            "SMTP_PORT": "465",
            "EMAIL_USERNAME": "bot",
            "EMAIL_PASSWORD": "secret",
            "FROM_ADDRESS": "Cineclube <cine@local>",
            "WHATSAPP_LINK": "https://chat.whatsapp.com/abc",
            "SUBSCRIBERS_FILE": "data/subs.csv",
            "LOGS_DIR": "",
        }
        with patch("cineclube_signup.settings.load_dotenv"), patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        self.assertEqual(settings.api_port, 8080)
        self.assertEqual(settings.smtp.host, "mail.local")
        self.assertEqual(settings.smtp.port, 465)
        self.assertEqual(settings.smtp.username, "bot")
        self.assertEqual(settings.smtp.password, "secret")
        self.assertEqual(settings.smtp.from_address, "Cineclube <cine@local>")
        self.assertEqual(settings.whatsapp_link, "https://chat.whatsapp.com/abc")
        self.assertEqual(settings.subscribers_file, "data/subs.csv")
        self.assertEqual(settings.logs_dir, "")

    def test_invalid_port_raises(self) -> None:
        with patch("cineclube_signup.settings.load_dotenv"), patch.dict(os.environ, {"PORT": "abc"}, clear=True):
            with self.assertRaises(ValueError):
                load_settings()


if __name__ == "__main__":
    unittest.main()
