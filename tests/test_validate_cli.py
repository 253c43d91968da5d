import pytest

from niri_app_hotkey.models import ConfigError, ExitCode
from niri_app_hotkey.validate_cli import run_validate


@pytest.mark.asyncio
async def test_valid(sample_config_path, test_logger, capsys):
    assert await run_validate(sample_config_path, test_logger) == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert "Validating configuration for 3 application(s)..." in out
    assert "✅ [terminal]" in out
    assert "✅ [browser]" in out
    assert "✅ [notes]" in out
    assert "Configuration is valid!" in out


@pytest.mark.asyncio
async def test_errors(write_config, test_logger, capsys):
    path = write_config(
        """
        application "term" {
            spawn "foot"
            spawn-sh "foot"
            match app-id="foot"
        }
        application "term" {
            spawn "foot"
            match title="(broken"
        }
        application "ok" {
            spawn "ok"
            match app-id="ok"
        }
        """
    )
    assert await run_validate(path, test_logger) == ExitCode.CONFIG_ERROR
    out = capsys.readouterr().out
    assert "  [term]" in out
    assert "  ERROR: [term] Config error for 'spawn': Both spawn and spawn-sh are set -> Keep only one of them" in out
    assert "  ERROR: [term.match[0]] Config error for 'title': Invalid regular expression" in out
    assert "  ERROR: [term] Config error for 'name': Duplicate application name -> Names must be unique" in out
    assert "✅ [ok]" in out
    assert "Found 3 error(s) and 0 warning(s)" in out


@pytest.mark.asyncio
async def test_warnings_only(write_config, test_logger, capsys):
    path = write_config('application "term" {\n spawn "foot"\n match app-id="foot" titel="x"\n}\n')
    assert await run_validate(path, test_logger) == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert "  WARNING: [term.match[0]] Unknown option 'titel' (did you mean 'title'?)" in out
    assert "Found 1 warning(s)" in out


@pytest.mark.asyncio
async def test_unnamed_application(write_config, test_logger, capsys):
    path = write_config('application {\n spawn "foot"\n match app-id="foot"\n}\n')
    assert await run_validate(path, test_logger) == ExitCode.CONFIG_ERROR
    assert "  [application #0]" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_empty_file(write_config, test_logger, capsys):
    assert await run_validate(write_config(""), test_logger) == ExitCode.SUCCESS
    assert "0 application(s)" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_unreadable(tmp_path, test_logger):
    with pytest.raises(ConfigError):
        await run_validate(str(tmp_path / "missing.kdl"), test_logger)
