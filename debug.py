# debug.py
from __future__ import annotations
import logging
from typing import ClassVar, Dict

COMPONENTS = ("plugboard", "rotor", "reflector", "stepping", "encipher")


class Debug:
    """Per-component tracing for the machine parts.

    Switches live on the class, so ``--debug stepping`` flips them for the
    ``debug`` instance of every module at once. Handlers are installed the
    first time a component is switched on; importing a module never touches
    the root logger.
    """

    _handlers_ready: ClassVar[bool] = False
    _components: ClassVar[Dict[str, bool]] = {c: False for c in COMPONENTS}

    def __init__(self, *, log_to: str | None = None) -> None:
        self.log_to = log_to
        self.logger = logging.getLogger("ENIGMA")

    def is_active(self, component: str) -> bool:
        return Debug._components.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.is_active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True
        self._install_handlers()

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def _install_handlers(self) -> None:
        if Debug._handlers_ready:
            return
        # basicConfig is a no-op when the host already configured logging
        self.logger.setLevel(logging.DEBUG)
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if self.log_to:
            handlers.append(logging.FileHandler(self.log_to, encoding="utf-8"))
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )
        Debug._handlers_ready = True

    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")
