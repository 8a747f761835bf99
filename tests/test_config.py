from pathlib import Path

from browser_chromium.config import DEFAULT_LAUNCH_ARGS, ToolkitConfig, load_config


def test_defaults_match_headless_session() -> None:
    config = ToolkitConfig()

    assert config.browser.headless is True
    assert (config.browser.viewport_width, config.browser.viewport_height) == (1920, 1080)
    assert "Chrome/120" in config.browser.user_agent
    assert "--no-sandbox" in config.browser.launch_args
    assert config.browser.launch_args == DEFAULT_LAUNCH_ARGS
    assert config.actions.text_max_length == 10000
    assert config.actions.scroll_amount == 800
    assert config.actions.wait_timeout_ms == 5000
    assert config.actions.html_preview_length == 3000


def test_load_config_reads_env_file(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "BROWSER_CHROMIUM_BROWSER__HEADLESS=false",
                "BROWSER_CHROMIUM_BROWSER__EXECUTABLE_PATH=/opt/chrome/chrome",
                "BROWSER_CHROMIUM_ACTIONS__TEXT_MAX_LENGTH=2000",
            ]
        )
    )

    config = load_config(env_file=env_path)

    assert config.browser.headless is False
    assert config.browser.executable_path == Path("/opt/chrome/chrome")
    assert config.actions.text_max_length == 2000


def test_load_config_prioritises_overrides(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "\n".join(
            [
                "BROWSER_CHROMIUM_BROWSER__VIEWPORT_WIDTH=800",
                "BROWSER_CHROMIUM_ACTIONS__SCROLL_AMOUNT=100",
            ]
        )
    )

    config_path = tmp_path / "browser.yaml"
    config_path.write_text(
        "\n".join(
            [
                "browser:",
                "  viewport_width: 1024",
                "  install_hint: brew install chromium",
            ]
        )
    )

    config = load_config(config_path, env_file=env_path, browser={"viewport_height": 600})

    assert config.browser.viewport_width == 1024
    assert config.browser.viewport_height == 600
    assert config.browser.install_hint == "brew install chromium"
    assert config.actions.scroll_amount == 100


def test_yaml_sections_merge_with_environment(tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("BROWSER_CHROMIUM_BROWSER__HEADLESS=false\n")
    config_path = tmp_path / "browser.yaml"
    config_path.write_text("browser:\n  viewport_width: 1280\nartifact_dir: shots\n")

    config = load_config(config_path, env_file=env_path)

    assert config.browser.headless is False
    assert config.browser.viewport_width == 1280
    assert config.browser.viewport_height == 1080
    assert config.artifact_dir == Path("shots")
