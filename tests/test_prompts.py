"""Tests for the interactive prompts (create_my_stack.prompts).

rich's Prompt / IntPrompt / Confirm are patched with scripted answers so the
question order and the skipping rules can be checked without a terminal.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from create_my_stack.config import ProjectConfig
from create_my_stack.prompts import confirm_generation, run_prompts, show_banner, show_summary
from create_my_stack.utils import console

pytestmark = pytest.mark.unit


def _run(answers: list[str], ports: list[int], confirms: list[bool], **kwargs) -> tuple:
    with patch("create_my_stack.prompts.Prompt.ask", side_effect=answers) as ask, \
         patch("create_my_stack.prompts.IntPrompt.ask", side_effect=ports) as int_ask, \
         patch("create_my_stack.prompts.Confirm.ask", side_effect=confirms) as confirm, \
         console.capture() as capture:
        config = run_prompts(**kwargs)
    return config, ask, int_ask, confirm, capture.get()


class TestRunPrompts:
    def test_full_stack_answers(self, tmp_path: Path):
        answers = [
            "shop", "An online shop",
            "express", "javascript", "mysql", "sequelize", "session", "nodemailer",
            "react", "scss", "zustand",
            "separate", "yarn",
        ]
        config, ask, int_ask, confirm, _ = _run(
            answers, [4000, 4100], [False, True], output_dir=tmp_path
        )

        assert isinstance(config, ProjectConfig)
        assert config.project_name == "shop"
        assert config.description == "An online shop"
        assert config.backend.framework == "express"
        assert config.backend.language == "javascript"
        assert config.backend.database == "mysql"
        assert config.backend.orm == "sequelize"
        assert config.backend.auth == "session"
        assert config.backend.mailing == "nodemailer"
        assert config.backend.port == 4000
        assert config.frontend.framework == "react"
        assert config.frontend.styling == "scss"
        assert config.frontend.state_management == "zustand"
        assert config.frontend.port == 4100
        assert config.structure == "separate"
        assert config.package_manager == "yarn"
        assert config.init_git is False
        assert config.docker is True
        assert config.root_path == tmp_path.resolve() / "shop"
        assert ask.call_count == len(answers)

    def test_nestjs_skips_language_and_no_database_skips_orm(self):
        answers = [
            "api", "Backend only",
            "nestjs", "none", "jwt", "none",
            "none",
            "npm",
        ]
        config, ask, int_ask, confirm, _ = _run(answers, [3001], [True, False])

        asked = [c.args[0] for c in ask.call_args_list]
        assert "Language" not in asked
        assert "ORM/ODM" not in asked
        assert "Styling" not in asked
        assert "Project structure" not in asked
        assert int_ask.call_count == 1

        assert config.backend.language == "typescript"
        assert config.backend.orm == "none"
        assert config.frontend.framework == "none"
        assert config.structure == "separate"
        assert config.backend.port == 3001

    def test_orm_choices_limited_to_database(self):
        answers = [
            "docs", "d",
            "fastify", "typescript", "mongodb", "mongoose", "none", "resend",
            "vue", "tailwind", "pinia",
            "monorepo", "pnpm",
        ]
        config, ask, *_ = _run(answers, [3000, 5173], [True, True])

        orm_call = next(c for c in ask.call_args_list if c.args[0] == "ORM/ODM")
        assert orm_call.kwargs["choices"] == ["prisma", "mongoose", "none"]
        state_call = next(c for c in ask.call_args_list if c.args[0] == "State management")
        assert state_call.kwargs["choices"] == ["pinia", "none"]
        assert config.frontend.state_management == "pinia"

    def test_invalid_name_is_asked_again(self):
        answers = [
            "Bad Name", "good-name", "desc",
            "express", "typescript", "none", "none", "none",
            "none",
            "pnpm",
        ]
        config, ask, int_ask, confirm, out = _run(answers, [3000], [True, True])
        assert config.project_name == "good-name"
        assert "Invalid package name" in out

    def test_out_of_range_port_is_asked_again(self):
        answers = [
            "ports", "desc",
            "express", "typescript", "none", "none", "none",
            "none",
            "pnpm",
        ]
        config, ask, int_ask, confirm, out = _run(answers, [70000, 8080], [True, True])
        assert config.backend.port == 8080
        assert int_ask.call_count == 2
        assert "between 1 and 65535" in out


class TestSummaryAndConfirm:
    def test_banner(self):
        with console.capture() as capture:
            show_banner()
        assert "create-my-stack" in capture.get()

    def test_summary_lists_choices(self, default_config):
        with console.capture() as capture:
            show_summary(default_config)
        out = capture.get()
        assert "Configuration Summary" in out
        assert "test-app" in out
        assert "express" in out
        assert "react" in out

    def test_summary_hides_frontend_rows_for_backend_only(self, backend_only_config):
        with console.capture() as capture:
            show_summary(backend_only_config)
        assert "Styling" not in capture.get()

    @pytest.mark.parametrize("answer", [True, False])
    def test_confirm_generation(self, answer):
        with patch("create_my_stack.prompts.Confirm.ask", return_value=answer):
            assert confirm_generation() is answer
