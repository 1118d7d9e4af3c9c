import logging
from abc import ABC

from pairflow.config import DEFAULT_CONFIG, Config

logger = logging.getLogger(__name__)


class LabelableBase:
    def __init__(self, label: str | None = None, **kwargs):
        self._label = label
        super().__init__(**kwargs)

    @property
    def has_assigned_label(self) -> bool:
        """
        Check if the label is explicitly set for this object.

        Returns:
            bool: True if the label is explicitly set, False otherwise.
        """
        return self._label is not None

    @property
    def label(self) -> str:
        """
        Get the label of this object.

        Returns:
            str: The assigned label, the computed label, or the class name.
        """
        return self._label or self.computed_label() or self.__class__.__name__

    @label.setter
    def label(self, label: str | None) -> None:
        self._label = label

    def computed_label(self) -> str | None:
        """
        Compute a label for this object. If no label is explicitly set and
        computed_label returns a value, it is used as the label of this object.
        """
        return None


class ConfigurableBase(ABC):
    def __init__(
        self,
        pairflow_config: Config | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if pairflow_config is None:
            pairflow_config = DEFAULT_CONFIG
        self._pairflow_config = pairflow_config

    @property
    def pairflow_config(self) -> Config:
        return self._pairflow_config


class LabeledConfigurableBase(ConfigurableBase, LabelableBase):
    pass
