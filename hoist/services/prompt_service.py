"""
Interactive Prompt Service

Asks the user for missing values on the terminal.
"""

from typing import Dict, Iterable

import inquirer

from hoist.exceptions import PromptError


class PromptService:
    """Collects free-text answers with inquirer."""

    def get(self, fields: Iterable[str]) -> Dict[str, str]:
        """
        Prompt for each field.

        Args:
            fields: Field names, also used as the question text

        Returns:
            Dict mapping field name to answer

        Raises:
            PromptError: If input fails, is cancelled or left empty
        """
        fields = list(fields)
        questions = [inquirer.Text(field, message=field) for field in fields]

        try:
            answers = inquirer.prompt(questions, raise_keyboard_interrupt=True)
        except KeyboardInterrupt:
            raise PromptError("Prompt cancelled")
        except Exception as e:
            raise PromptError("Prompt failed", context=str(e))

        if not answers:
            raise PromptError("No input received")

        result = {}
        for field in fields:
            value = (answers.get(field) or "").strip()
            if not value:
                raise PromptError(f"No value given for '{field}'")
            result[field] = value

        return result
