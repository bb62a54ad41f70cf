from __future__ import annotations

import unittest

from cineclube_signup.welcome_email import WELCOME_SUBJECT, build_welcome_email


class WelcomeEmailTests(unittest.TestCase):
    def test_greets_by_name_and_links_group(self) -> None:
        email = build_welcome_email("Ada", "https://chat.whatsapp.com/abc")
        self.assertEqual(email.subject, WELCOME_SUBJECT)
        self.assertEqual(WELCOME_SUBJECT, "Bem-vindo(a) ao Turing Cineclube!")
        self.assertIn("<p>Olá Ada,</p>", email.html)
        self.assertIn('href="https://chat.whatsapp.com/abc"', email.html)

    def test_name_is_html_escaped(self) -> None:
        email = build_welcome_email("<script>alert(1)</script>", "https://x")
        self.assertNotIn("<script>", email.html)
        self.assertIn("&lt;script&gt;", email.html)


if __name__ == "__main__":
    unittest.main()
