"""Generated source fragments and how they are installed on a class."""

import logging
from dataclasses import dataclass

from enumselect.constants import GENERATED_FILENAME_PREFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratedCode:
    """
    Python source defining one installer function for one class.

    The installer takes the class, sets the generated attributes on it and
    returns it. ``install`` runs it on a live class; the module writer embeds
    ``source`` verbatim and calls the installer after the class definition.
    """
    type_name: str
    installer_name: str
    source: str

    def install(self, cls: type) -> type:
        """
        Compile the installer and apply it to ``cls``.

        Args:
            cls: Class the code was generated for

        Returns:
            The same class, with the generated attributes set
        """
        namespace = {}
        code = compile(self.source, f"{GENERATED_FILENAME_PREFIX}{self.installer_name}>", "exec")
        exec(code, namespace)
        installed = namespace[self.installer_name](cls)
        logger.debug(f"Installed {self.installer_name} on {cls.__qualname__}")
        return installed
