from unittest.mock import patch

import pytest

from hoist.exceptions import PromptError
from hoist.services.prompt_service import PromptService


@patch("hoist.services.prompt_service.inquirer.prompt")
def test_returns_answers(mock_prompt):
    mock_prompt.return_value = {"app name": "  api "}
    assert PromptService().get(["app name"]) == {"app name": "api"}

    questions = mock_prompt.call_args[0][0]
    assert [q.name for q in questions] == ["app name"]


@patch("hoist.services.prompt_service.inquirer.prompt")
def test_cancelled_prompt(mock_prompt):
    mock_prompt.side_effect = KeyboardInterrupt
    with pytest.raises(PromptError):
        PromptService().get(["app name"])


@patch("hoist.services.prompt_service.inquirer.prompt")
def test_no_answers(mock_prompt):
    mock_prompt.return_value = None
    with pytest.raises(PromptError):
        PromptService().get(["app name"])


@patch("hoist.services.prompt_service.inquirer.prompt")
def test_empty_answer(mock_prompt):
    mock_prompt.return_value = {"app name": ""}
    with pytest.raises(PromptError):
        PromptService().get(["app name"])


@patch("hoist.services.prompt_service.inquirer.prompt")
def test_input_failure(mock_prompt):
    mock_prompt.side_effect = OSError("not a terminal")
    with pytest.raises(PromptError) as exc_info:
        PromptService().get(["app name"])
    assert "not a terminal" in exc_info.value.context
