import argparse
import logging
import signal
import sys
from typing import Optional

from app_config import (
    AppConfig,
    AppConfigurationError,
    SecretConfig,
    load_app_config,
    load_secret_config,
    resolve_config_path,
)
from pomodoro import FocusSession, SessionConfig, SessionConfigError, SettingsStore
from rewards import RewardConfig, RewardConfigurationError, build_reward_dispatcher
from runtime import RuntimeBootstrap, RuntimeEngine
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("focus_app")


def setup_signal_handlers(engine: RuntimeEngine, logger: logging.Logger) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        logger.info("%s received, stopping...", signal.Signals(signum).name)
        engine.stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_session(app_config: AppConfig, logger: logging.Logger) -> FocusSession:
    settings = app_config.session
    store = SettingsStore(
        SessionConfig(
            work=settings.work_minutes,
            short=settings.short_break_minutes,
            long=settings.long_break_minutes,
        ),
        task_label=settings.task_label,
        alert_sound=settings.alert_sound,
    )
    return FocusSession(store, logger=logger)


def build_ui_server(
    app_config: AppConfig,
    logger: logging.Logger,
) -> Optional[UIServer]:
    config = UIServerConfig.from_settings(app_config.ui_server)
    if not config.enabled:
        logger.info("UI server disabled via ui_server.enabled=false")
        return None
    logger.info("Dashboard will be served at %s", config.http_url)
    return UIServer(config=config, logger=logger)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Focus session timer service")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.toml (defaults to APP_CONFIG_FILE or ./config.toml)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    logger = setup_logging(logging.DEBUG if args.debug else logging.INFO)

    try:
        config_path = resolve_config_path(args.config)
        app_config = load_app_config(str(config_path))
        secrets: SecretConfig = load_secret_config()
        logger.info("Loaded configuration from %s", app_config.source_file)

        session = build_session(app_config, logging.getLogger("pomodoro"))
        reward_config = RewardConfig.from_settings(
            app_config.alerts,
            app_config.reward,
            user_id=secrets.user_id,
            api_token=secrets.reward_api_token,
        )
        ui_server = build_ui_server(app_config, logging.getLogger("ui_server"))
    except (
        AppConfigurationError,
        ServerConfigurationError,
        RewardConfigurationError,
        SessionConfigError,
    ) as error:
        logger.error("Configuration error: %s", error)
        return 1

    dispatcher = build_reward_dispatcher(reward_config, logger=logging.getLogger("rewards"))
    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            session=session,
            dispatcher=dispatcher,
            ui_server=ui_server,
        )
    )

    if ui_server is not None:
        ui_server.set_command_handler(engine.submit_command)
        try:
            ui_server.start()
        except RuntimeError as error:
            logger.error("Failed to start UI server: %s", error)
            dispatcher.shutdown(wait=False)
            return 1

    setup_signal_handlers(engine, logger)
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())
