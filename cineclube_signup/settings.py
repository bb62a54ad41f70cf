from __future__ import annotations

import os

from dotenv import load_dotenv

from cineclube_signup.models import AppSettings, SmtpSettings


def load_settings() -> AppSettings:
    load_dotenv()
    return AppSettings(
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=int(os.getenv("PORT", "3000")),
        subscribers_file=os.getenv("SUBSCRIBERS_FILE", "subscribers.csv"),
        whatsapp_link=os.getenv("WHATSAPP_LINK", "https://chat.whatsapp.com/SEU_LINK_DO_GRUPO"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        logs_dir=os.getenv("LOGS_DIR", "logs"),
        smtp=SmtpSettings(
            host=os.getenv("SMTP_HOST", "smtp.example.com"),
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("EMAIL_USERNAME", "usuario@exemplo.com"),
            password=os.getenv("EMAIL_PASSWORD", "senha"),
            from_address=os.getenv("FROM_ADDRESS", "Turing Cineclube <noreply@exemplo.com>"),
            timeout_sec=int(os.getenv("SMTP_TIMEOUT_SEC", "30")),
        ),
    )
