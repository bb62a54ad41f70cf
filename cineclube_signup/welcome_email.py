from __future__ import annotations

import html
from dataclasses import dataclass

WELCOME_SUBJECT = "Bem-vindo(a) ao Turing Cineclube!"


@dataclass(frozen=True)
class WelcomeEmail:
    subject: str
    html: str


def build_welcome_email(name: str, whatsapp_link: str) -> WelcomeEmail:
    safe_name = html.escape(name)
    safe_link = html.escape(whatsapp_link, quote=True)
    body = f"""\
<p>Olá {safe_name},</p>
<p>Obrigado por se inscrever no <strong>Turing Cineclube</strong>! Estamos muito felizes em contar com sua participação.</p>
<p>O Turing Cineclube é um espaço para discutir cinema, ciência da computação e cultura digital. Você receberá atualizações sobre nossas sessões, debates e novidades.</p>
<p>Para começar a interagir com nossa comunidade, participe do grupo do WhatsApp através deste link ou código:</p>
<p><a href="{safe_link}">Entrar no grupo do WhatsApp</a></p>
<p>Esperamos vê-lo(a) em breve!</p>
<p>Abraços,<br/>Equipe Turing Cineclube</p>
"""
    return WelcomeEmail(subject=WELCOME_SUBJECT, html=body)
