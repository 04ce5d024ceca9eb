"""Prompt construction for statement transcription.

Builds:
- The system instructions for the transcription task.
- The user content, embedding the (already truncated) statement text between
  ``BEGIN_STATEMENT_TEXT`` / ``END_STATEMENT_TEXT`` markers.
- The ``text`` config requesting JSON object output from the Responses API.

The model's answer is still treated as untrusted; the assembler validates it.
"""

from __future__ import annotations

from openai.types.responses import ResponseTextConfigParam

BEGIN = "BEGIN_STATEMENT_TEXT\n"
END = "\nEND_STATEMENT_TEXT"

_USER_TEMPLATE = """\
From the following bank statement text, extract the account holder name, \
address, statement date, currency, starting balance, ending balance, and all \
transactions.

Respond in strict JSON with this structure:

{
  "name": "string or null",
  "address": "string or null",
  "date": "string or null",
  "currency": "currency symbol or ISO code, or null",
  "startingBalance": number or null,
  "endingBalance": number or null,
  "transactions": [
    {
      "date": "DD-MM-YYYY or similar",
      "description": "string",
      "moneyIn": number or null,
      "moneyOut": number or null,
      "currency": "string or null"
    }
  ]
}

Rules:
- Put credit amounts (money in) in 'moneyIn', and set 'moneyOut' to null or 0.
- Put debit amounts (money out) in 'moneyOut', and set 'moneyIn' to null or 0.
- Amounts are positive magnitudes; never negative.
- Keep transactions in the order they appear on the statement.
- Skip empty or ambiguous transactions.
- No additional text before or after the JSON.

{{STATEMENT_TEXT}}
"""


def build_system_instructions() -> str:
    """Return concise system instructions for statement transcription."""

    return (
        "You are an expert financial assistant that transcribes bank statements into "
        "structured data. Never invent transactions or balances that are not in the text. "
        "Output JSON only."
    )


def build_user_content(statement_text: str) -> str:
    """Embed ``statement_text`` between the delimiters in the task template."""

    block = f"{BEGIN}{statement_text}{END}"
    return _USER_TEMPLATE.replace("{{STATEMENT_TEXT}}", block)


def build_text_config() -> ResponseTextConfigParam:
    """Request a JSON object (not a strict schema) from the Responses API.

    The field shape is not enforced here; the model may omit or mistype fields
    and the normalizer decides what survives.
    """

    return {"format": {"type": "json_object"}}


__all__ = [
    "BEGIN",
    "END",
    "build_system_instructions",
    "build_text_config",
    "build_user_content",
]
