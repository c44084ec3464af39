"""Plain-text digest generator."""

from datetime import date
from typing import Optional

from market_digest.core import DigestEntry, DigestGenerator


class PlainTextDigestGenerator(DigestGenerator):
    """Generate a bare bullet list digest."""

    async def generate(
        self,
        entries: list[DigestEntry],
        digest_date: date,
        status_message: Optional[str] = None,
    ) -> str:
        lines = [f"# 市場摘要 {digest_date.isoformat()}", ""]

        if status_message:
            lines.extend([status_message, ""])

        if not entries:
            lines.append("今日無可用新聞。")
            return "\n".join(lines) + "\n"

        for entry in entries:
            lines.append(f"- {entry.bullet}")

        return "\n".join(lines) + "\n"
