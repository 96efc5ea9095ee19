"""Tests for the command-line adapter."""

from unittest.mock import AsyncMock, patch

import pytest

from screenshot_to_code.api import cli
from screenshot_to_code.image.client import ImageFetchError
from screenshot_to_code.llm.errors import BackendError


class TestGenerateCommand:
    def test_prints_code(self, capsys):
        with patch.object(cli, "generate_component", AsyncMock(return_value="export default function A() {}")) as generate:
            status = cli.main(["generate", "https://x/shot.png", "--model", "meta-llama", "--shadcn"])

        assert status == 0
        assert "export default function A() {}" in capsys.readouterr().out
        request = generate.await_args.args[0]
        assert request.model == "meta-llama"
        assert request.image_url == "https://x/shot.png"
        assert request.shadcn is True

    def test_defaults(self):
        with patch.object(cli, "generate_component", AsyncMock(return_value="")) as generate:
            cli.main(["generate", "https://x/shot.png"])

        request = generate.await_args.args[0]
        assert request.model == "gemini"
        assert request.shadcn is False

    @pytest.mark.parametrize(
        "error",
        [ImageFetchError("Failed to fetch the image."), BackendError("gemini", "down", 503)],
    )
    def test_failures_exit_nonzero(self, error, capsys):
        with patch.object(cli, "generate_component", AsyncMock(side_effect=error)):
            status = cli.main(["generate", "https://x/shot.png"])

        assert status == 1
        assert "Error:" in capsys.readouterr().err


class TestServeCommand:
    def test_runs_server(self):
        with patch.object(cli, "run_server") as run_server:
            status = cli.main(["serve", "--port", "9000"])

        assert status == 0
        run_server.assert_called_once_with(host="0.0.0.0", port=9000, reload=False)
