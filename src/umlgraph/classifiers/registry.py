# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Registry for declaration classifier plugins."""

import logging
from typing import List

from umlgraph.declarations import Declaration

from .base import DeclarationClassifier

logger = logging.getLogger(__name__)


class ClassifierRegistry:
    """Registry that dispatches declarations to classifier plugins.

    Classifiers are returned in registration order, so observations from one
    declaration keep a deterministic order.

    Thread Safety:
    - NOT thread-safe: Designed for single-threaded use
    - Register all classifiers during initialization before processing
    """

    def __init__(self) -> None:
        """Initialize empty classifier registry."""
        self._classifiers: List[DeclarationClassifier] = []

    def register(self, classifier: DeclarationClassifier) -> None:
        """Register a classifier plugin.

        Args:
            classifier: Classifier to register.

        Raises:
            TypeError: If classifier is not a DeclarationClassifier instance.
        """
        if not isinstance(classifier, DeclarationClassifier):
            raise TypeError(
                f"Classifier must be a DeclarationClassifier instance, got {type(classifier)}"
            )

        self._classifiers.append(classifier)
        logger.debug(
            f"Registered classifier '{classifier.name()}' for "
            f"{classifier.declaration_type().__name__}"
        )

    def get_classifiers(self) -> List[DeclarationClassifier]:
        return list(self._classifiers)

    def classifiers_for(self, decl: Declaration) -> List[DeclarationClassifier]:
        """Return the classifiers handling this declaration's variant."""
        return [c for c in self._classifiers if c.handles(decl)]

    def clear(self) -> None:
        """Remove all registered classifiers.

        Used for testing and reconfiguration.
        """
        self._classifiers.clear()

    def count(self) -> int:
        return len(self._classifiers)


def default_registry() -> ClassifierRegistry:
    """Create a registry with the built-in classifiers."""
    from .function_classifier import FunctionClassifier
    from .impl_classifier import ImplClassifier
    from .import_classifier import ImportClassifier
    from .interface_classifier import InterfaceClassifier
    from .type_classifier import TypeClassifier

    registry = ClassifierRegistry()
    registry.register(TypeClassifier())
    registry.register(InterfaceClassifier())
    registry.register(ImplClassifier())
    registry.register(FunctionClassifier())
    registry.register(ImportClassifier())
    return registry
