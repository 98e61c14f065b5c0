"""Tests for TransformerChain ordering, short-circuiting and contract errors."""

from __future__ import annotations

from typing import Any

import pytest

from form_binder.chain import TransformerChain
from form_binder.failures import TransformationFailure, TransformerContractError
from form_binder.transformers.base import BaseTransformer
from form_binder.transformers.pass_through import PassThroughTransformer


class Recording(BaseTransformer):
    """Appends its tag on the way out, strips it on the way back, logs every call."""

    def __init__(self, tag: str, calls: list[tuple[str, str]]) -> None:
        super().__init__({"tag": tag})
        self._tag = tag
        self._calls = calls

    @property
    def name(self) -> str:
        return f"Recording[{self._tag}]"

    def transform(self, value: Any) -> str:
        self._calls.append(("transform", self._tag))
        return f"{value or ''}{self._tag}"

    def reverse_transform(self, value: Any):
        self._calls.append(("reverse_transform", self._tag))
        assert value.endswith(self._tag)
        return value[: -len(self._tag)]


class Failing(BaseTransformer):
    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def transform(self, value: Any) -> Any:
        return value

    def reverse_transform(self, value: Any):
        self.calls += 1
        return self.fail("always fails", "Nope {{ value }}", value=value)


class Raising(BaseTransformer):
    def transform(self, value: Any) -> Any:
        raise RuntimeError("bug in transform")

    def reverse_transform(self, value: Any):
        raise RuntimeError("bug in reverse")


class TestOrdering:
    def test_forward_runs_in_declaration_order(self):
        calls: list[tuple[str, str]] = []
        chain = TransformerChain([Recording(t, calls) for t in "abc"])
        assert chain.apply_forward("") == "abc"
        assert calls == [("transform", "a"), ("transform", "b"), ("transform", "c")]

    def test_backward_runs_in_exact_reverse_order(self):
        calls: list[tuple[str, str]] = []
        chain = TransformerChain([Recording(t, calls) for t in "abc"])
        assert chain.apply_backward("xabc") == "x"
        assert calls == [
            ("reverse_transform", "c"),
            ("reverse_transform", "b"),
            ("reverse_transform", "a"),
        ]

    def test_forward_equals_nested_composition(self):
        calls: list[tuple[str, str]] = []
        t1, t2 = Recording("1", calls), Recording("2", calls)
        chain = TransformerChain([t1, t2])
        assert chain.apply_forward("v") == t2.transform(t1.transform("v"))

    def test_empty_chain_is_identity(self):
        chain = TransformerChain()
        marker = object()
        assert chain.apply_forward(marker) is marker
        assert chain.apply_backward(marker) is marker
        assert len(chain) == 0


class TestShortCircuit:
    def test_failure_halts_remaining_steps(self):
        """Backward with [first, failing, last]: last runs, failing fails, first never runs."""
        calls: list[tuple[str, str]] = []
        first = Recording("a", calls)
        failing = Failing()
        last = Recording("c", calls)
        chain = TransformerChain([first, failing, last])

        result = chain.apply_backward("xc")

        assert isinstance(result, TransformationFailure)
        assert failing.calls == 1
        assert calls == [("reverse_transform", "c")]

    def test_failure_tagged_with_step_name(self):
        chain = TransformerChain([Failing()])
        result = chain.apply_backward("x")
        assert isinstance(result, TransformationFailure)
        assert result.transformer == "Failing"
        assert result.parameters["value"] == "x"


class TestContractErrors:
    def test_raising_transform_is_contract_error(self):
        chain = TransformerChain([PassThroughTransformer(), Raising()])
        with pytest.raises(TransformerContractError, match="Raising.transform"):
            chain.apply_forward(1)

    def test_raising_reverse_transform_is_contract_error(self):
        chain = TransformerChain([Raising()])
        with pytest.raises(TransformerContractError, match="reverse_transform"):
            chain.apply_backward(1)


class TestChainObject:
    def test_append_returns_new_chain(self):
        chain = TransformerChain(role="view")
        longer = chain.append(PassThroughTransformer())
        assert len(chain) == 0
        assert len(longer) == 1
        assert longer.role == "view"
        assert longer.names == ["PassThroughTransformer"]

    def test_invalid_role_rejected(self):
        with pytest.raises(ValueError, match="role"):
            TransformerChain(role="sideways")  # type: ignore[arg-type]
