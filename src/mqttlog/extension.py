"""Extension entry point: configuration in, dispatch gate out."""

from __future__ import annotations

from pathlib import Path

from mqttlog.gate import EventDispatchGate
from mqttlog.logging import get_logger, setup_logging
from mqttlog.profile import FeatureProfile
from mqttlog.reader import EXTENSION_NAME, read_profile
from mqttlog.sinks import LoggerSink, Sink

logger = get_logger(__name__)


class StartupPreventedError(RuntimeError):
    """The extension must not be started; ``reason`` says why."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class MessageLogExtension:
    """Builds the gate the broker hook dispatches through.

    ``start()`` reads the profile (unless one was given), refuses to start
    when every event flag is off and returns the gate. ``stop()`` drops it.
    ``start(configure_logging=True)`` first runs ``setup_logging()``, for
    hosts that do not configure logging themselves.
    """

    def __init__(
        self,
        extension_home: str | Path | None = None,
        sink: Sink | None = None,
        profile: FeatureProfile | None = None,
    ) -> None:
        if extension_home is None:
            from mqttlog.config import settings
            extension_home = settings.extension_home
        self.extension_home = Path(extension_home)
        self._sink = sink
        self._profile = profile
        self.gate: EventDispatchGate | None = None

    @property
    def running(self) -> bool:
        return self.gate is not None

    def start(self, configure_logging: bool = False) -> EventDispatchGate:
        if self.gate is not None:
            return self.gate

        if configure_logging:
            setup_logging()

        profile = self._profile or read_profile(self.extension_home)
        if profile.all_disabled():
            raise StartupPreventedError(
                f"{EXTENSION_NAME} start prevented because all properties set to false"
            )

        sink = self._sink
        if sink is None:
            from mqttlog.config import settings
            sink = LoggerSink(settings.message_logger)

        self._profile = profile
        self.gate = EventDispatchGate(profile, sink)
        logger.info(
            f"{EXTENSION_NAME} started",
            verbose=profile.verbose, payload=profile.payload, json=profile.json_format,
        )
        return self.gate

    def stop(self) -> None:
        if self.gate is not None:
            logger.info(f"{EXTENSION_NAME} stopped")
        self.gate = None
