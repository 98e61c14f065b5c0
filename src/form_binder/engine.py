"""Form engine — builds forms from a YAML definition.

Reads a validated config, resolves transformer and lookup keys to concrete
classes via the registry, injects the opened lookups into the transformers
that need them, and hands back a ready :class:`~form_binder.form.Form`.

The engine **never** imports a concrete transformer or lookup class.
It relies entirely on the decorator-based registry for class resolution.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Mapping

import yaml

# Importing the subpackages triggers @register_* decorators in their __init__.py
import form_binder.transformers  # noqa: F401
import form_binder.lookups  # noqa: F401

from form_binder.chain import ChainRole, TransformerChain
from form_binder.form import FieldBinding, Form, RenderResult, SubmissionResult
from form_binder.lookups.base import BaseLookup
from form_binder.models import FieldConfig, FormConfig, TransformStepConfig
from form_binder.registry import get_lookup, get_transformer
from form_binder.transformers.base import BaseTransformer

logger = logging.getLogger(__name__)


class FormEngine:
    """Load a form config, open its lookups and build bound forms.

    Lookups passed in *lookups* take precedence over config entries of the
    same name; the caller owns their lifecycle.  Lookups created from config
    are opened on :meth:`open` (or ``with engine:``) and closed on :meth:`close`.
    """

    def __init__(
        self,
        config_path: str | Path,
        *,
        lookups: Mapping[str, BaseLookup] | None = None,
    ) -> None:
        self._config_path = Path(config_path)
        self._injected: dict[str, BaseLookup] = dict(lookups or {})
        self._config: FormConfig | None = None
        self._lookups: dict[str, BaseLookup] = {}
        self._stack: ExitStack | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> FormConfig:
        if self._config is None:
            raw = yaml.safe_load(self._config_path.read_text())
            self._config = FormConfig.model_validate(raw)

            logging.basicConfig(
                level=self._config.settings.log_level,
                format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            )
            logger.info(
                "Loaded form %r with %d fields from %s",
                self._config.form.name,
                len(self._config.form.fields),
                self._config_path,
            )
        return self._config

    def open(self) -> None:
        """Instantiate and connect every configured lookup."""
        if self._stack is not None:
            return
        config = self.config
        stack = ExitStack()
        lookups: dict[str, BaseLookup] = dict(self._injected)
        try:
            for name, lk_cfg in config.form.lookups.items():
                if name in self._injected:
                    logger.info("Lookup %r supplied by caller — skipping config", name)
                    continue
                step_config = self._resolve_step_config(lk_cfg.config_file, lk_cfg.inline_config)
                lookup_cls = get_lookup(lk_cfg.source)
                logger.info("Registry resolved %r → %s", lk_cfg.source, lookup_cls.__name__)
                lookups[name] = stack.enter_context(lookup_cls(step_config))
        except BaseException:
            stack.close()
            raise
        self._stack = stack
        self._lookups = lookups

    def close(self) -> None:
        """Close the lookups opened by :meth:`open`."""
        if self._stack is not None:
            self._stack.close()
            self._stack = None
            self._lookups = {}

    def __enter__(self) -> FormEngine:
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def build_form(self, data: Any = None) -> Form:
        """Return a :class:`Form` over *data*; opens lookups if needed."""
        config = self.config
        self.open()
        bindings = [self._build_binding(field) for field in config.form.fields]
        return Form(
            bindings,
            data,
            name=config.form.name,
            fallback_message=config.settings.fallback_message,
        )

    def render(self, data: Any) -> RenderResult:
        """Build a form over *data* and run the outbound pass."""
        opened_here = self._stack is None
        try:
            return self.build_form(data).create_view()
        finally:
            if opened_here:
                self.close()

    def submit(
        self,
        data: Any,
        view_values: Mapping[str, Any],
        *,
        clear_missing: bool = True,
    ) -> SubmissionResult:
        """Build a form over *data* and run the inbound pass.

        *data* is updated in place for every field that binds.
        """
        opened_here = self._stack is None
        try:
            form = self.build_form(data)
            return form.submit(view_values, clear_missing=clear_missing)
        finally:
            if opened_here:
                self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_step_config(
        config_file: str | None,
        inline_config: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Merge config_file YAML with inline_config.  Inline wins."""
        merged: dict[str, Any] = {}
        if config_file is not None:
            merged.update(yaml.safe_load(Path(config_file).read_text()) or {})
        if inline_config is not None:
            merged.update(inline_config)
        return merged

    def _build_binding(self, field: FieldConfig) -> FieldBinding:
        return FieldBinding(
            name=field.name,
            model_chain=self._build_chain(field.name, field.model_transformers, "model"),
            view_chain=self._build_chain(field.name, field.view_transformers, "view"),
            invalid_message=field.invalid_message,
            invalid_message_parameters=field.invalid_message_parameters,
        )

    def _build_chain(
        self,
        field_name: str,
        steps: list[TransformStepConfig],
        role: ChainRole,
    ) -> TransformerChain:
        transformers = [self._build_transformer(field_name, step) for step in steps]
        chain = TransformerChain(transformers, role)
        logger.debug("Field %r %s chain: %s", field_name, role, chain.names)
        return chain

    def _build_transformer(self, field_name: str, step: TransformStepConfig) -> BaseTransformer:
        step_config = self._resolve_step_config(step.config_file, step.inline_config)
        transformer_cls = get_transformer(step.name)
        logger.debug("Registry resolved %r → %s", step.name, transformer_cls.__name__)

        if not getattr(transformer_cls, "requires_lookup", False):
            return transformer_cls(step_config)

        lookup_name = step_config.get("lookup")
        if lookup_name not in self._lookups:
            available = ", ".join(sorted(self._lookups)) or "(none)"
            raise ValueError(
                f"Field {field_name!r}: transformer {step.name!r} needs lookup "
                f"{lookup_name!r}. Available: {available}"
            )
        return transformer_cls(step_config, lookup=self._lookups[lookup_name])
