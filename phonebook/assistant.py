import logging
from typing import Iterable, Optional

from openai import OpenAI, OpenAIError

log = logging.getLogger(__name__)


class CommandSuggester:
    """Guesses which menu command a mistyped entry was meant to be."""

    def __init__(self, client, model: str = "gpt-4o-mini"):
        self.client = client
        self.model = model

    @classmethod
    def from_key_file(cls, path: str, model: str = "gpt-4o-mini") -> Optional["CommandSuggester"]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                key = f.read().strip()
        except FileNotFoundError:
            return None
        if not key:
            return None
        return cls(OpenAI(api_key=key), model)

    def suggest(self, user_input: str, commands: Iterable[str]) -> Optional[str]:
        """
        Ask the model for the canonical command name.
        Returns None when nothing fits or the request fails.
        """
        commands = list(commands)
        if not user_input.strip():
            return None
        sys_prompt = (
            "You are a CLI assistant that fixes mistyped commands.\n\n"
            "Supported commands:\n" + "\n".join(commands) +
            "\n\nReturn ONLY the canonical command name or empty string."
        )
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": sys_prompt},
                    {"role": "user", "content": user_input},
                ],
                temperature=0.0,
                max_tokens=6,
            )
        except OpenAIError as e:
            log.warning("Command suggestion failed: %s", e)
            return None
        guess = (resp.choices[0].message.content or "").strip().strip("\"'")
        return guess if guess in commands else None
