import os
from dataclasses import dataclass
from datetime import datetime, timezone

from jinja2 import Environment, FileSystemLoader, select_autoescape

from nagarconnect import i18n

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")

_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(["html"]),
)


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str


def render_status_email(issue_title: str, new_status: str, language: str) -> EmailContent:
    """Localized status-change email; adds the resolution block for ``resolved``."""
    language = i18n.normalize_language(language)
    strings = i18n.EMAIL_STRINGS[language]

    html = _env.get_template("emails/status_update.html").render(
        language=language,
        s=strings,
        issue_title=issue_title,
        status_label=i18n.status_label(new_status, language),
        status_color=i18n.status_color(new_status),
        resolved=new_status == "resolved",
        year=datetime.now(timezone.utc).year,
    )
    return EmailContent(subject=strings["subject"].format(title=issue_title), html=html)
