"""
Pipeline generator.

Runs the conversion in two phases:

1. Analyzer: validate the schema and infer the Concerto metamodel IR
2. Backend: render the IR as CTO, TypeScript, Markdown or metamodel JSON
"""

from __future__ import annotations

import json
import logging
from typing import Any

from .analyzer.errors import SchemaConversionError
from .analyzer.ir_nodes import Models
from .analyzer.visitor import infer_models
from .backends import CodeBackend, CtoBackend, MarkdownBackend, TypeScriptBackend
from .config import CodeGeneratorConfig, OutputFormat

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Converts a JSON Schema document and renders the result."""

    BACKENDS: dict[OutputFormat, type[CodeBackend]] = {
        OutputFormat.CTO: CtoBackend,
        OutputFormat.TYPESCRIPT: TypeScriptBackend,
        OutputFormat.MARKDOWN: MarkdownBackend,
    }

    def __init__(
        self,
        schema: Any,
        config: CodeGeneratorConfig | None = None,
        output_format: OutputFormat | str = OutputFormat.CTO,
    ):
        """
        Initialize the generator.

        Args:
            schema: The parsed JSON Schema document
            config: Generation configuration (namespace is required)
            output_format: One of "cto", "json", "ts", "md"
        """
        self.schema = schema
        self.config = config or CodeGeneratorConfig()
        self.output_format = OutputFormat(output_format)
        self.warnings: list[str] = []

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def infer(self) -> Models:
        """
        Infer the Concerto models of the schema.

        Returns:
            The inferred models

        Raises:
            SchemaConversionError: If no namespace is configured or a type is unsupported
            jsonschema.exceptions.SchemaError: If the document is not a valid schema
        """
        if not self.config.namespace:
            raise SchemaConversionError("A namespace is required to generate a Concerto model.")

        self.warnings = []
        models = infer_models(
            self.schema,
            namespace=self.config.namespace,
            meta_model_namespace=self.config.meta_model_namespace,
            path_to_definitions=self.config.path_to_definitions or None,
            warn=self._warn,
        )
        logger.debug("Inferred %d model(s) in %s", len(models.models), self.config.namespace)
        return models

    def generate(self) -> str:
        """
        Generate output in the configured format.

        Returns:
            Generated text
        """
        models = self.infer()

        if self.output_format == OutputFormat.JSON:
            return json.dumps(models.to_dict(), indent=self.config.json_indent, ensure_ascii=False)

        backend = self.BACKENDS[self.output_format](self.config)
        logger.debug("Rendering with %s", type(backend).__name__)
        return backend.generate(models)
