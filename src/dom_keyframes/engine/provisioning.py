"""Engine provisioning performed by callers before compilation."""

from ..config import EngineConfig
from ..errors import EngineUnavailableError
from .adapter import EngineAdapter


def ensure_engine(adapter: EngineAdapter, config: EngineConfig) -> EngineAdapter:
    """
    Make sure ``adapter`` is available, provisioning it when allowed.

    Raises:
        EngineUnavailableError: If the engine is missing and auto provisioning is off,
            or provisioning did not make it available
    """
    if adapter.is_available():
        return adapter
    if not config.auto_provision:
        raise EngineUnavailableError(
            f"Tween engine '{config.engine}' not found and auto provisioning is disabled"
        )
    adapter.provision()
    if not adapter.is_available():
        raise EngineUnavailableError(f"Tween engine '{config.engine}' could not be provisioned")
    return adapter
