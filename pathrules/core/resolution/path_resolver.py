"""
PathResolver - locates leaf values in arbitrary object graphs by dotted path.

A path has the shape ``Anchor.segment1...segmentN``. The anchor is a label for
the root object; every other segment names a field. Sequence-valued fields
are either fanned out (one result per element) or indexed explicitly.
"""

import os
from collections.abc import Iterable, Sequence
from typing import Any

from pathrules.core.models import ResolvedField
from pathrules.observability.logger import get_logger

from .field_source import AttributeFieldSource, FieldInfo, FieldSource

logger = get_logger(__name__)


class PathResolver:
    """
    Resolves dotted paths against one or more candidate root objects.

    Roots are tried in order as alternatives: the first root producing a
    non-empty result wins and results are never merged across roots.
    Resolution is best-effort: fields that cannot be read are skipped and
    only a negative array index is rejected.

    A branch is only descended while its label is a prefix of the target
    path, so recursion depth is bounded by the number of path segments and
    self-referencing graphs are safe.
    """

    def __init__(
        self,
        field_source: FieldSource | None = None,
        strict_anchor: bool = False,
        max_depth: int | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            field_source: Field enumeration capability (defaults to AttributeFieldSource)
            strict_anchor: Require the path anchor to equal the root's type name
            max_depth: Optional bound on nesting depth, defaults to $PATHRULES_MAX_DEPTH
        """
        self.field_source = field_source or AttributeFieldSource()
        self.strict_anchor = strict_anchor

        if max_depth is None and os.getenv("PATHRULES_MAX_DEPTH"):
            max_depth = int(os.getenv("PATHRULES_MAX_DEPTH", "0"))
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.max_depth = max_depth

    def resolve(
        self,
        roots: Iterable[Any],
        path: str,
        array_index: int | None = None,
    ) -> list[ResolvedField]:
        """
        Find every leaf value matching `path`.

        Args:
            roots: Candidate root objects, tried in order
            path: Dotted path, ``Anchor.seg1...segN``
            array_index: Element index to use for a sequence-valued leaf (or
                for the sequence directly above the leaf)

        Returns:
            Resolved fields of the first root with a match, empty if none matched

        Raises:
            ValueError: If array_index is negative
        """
        if array_index is not None and array_index < 0:
            raise ValueError(f"array_index must be non-negative, got {array_index}")

        anchor = path.split(".", 1)[0]

        for root in roots:
            if root is None:
                continue
            if self.strict_anchor and type(root).__name__ != anchor:
                continue

            found = self._find(root, anchor, path, array_index, depth=1)
            if found:
                logger.debug(
                    f"Resolved {path} to {len(found)} value(s)",
                    extra={"path": path, "array_index": array_index, "match_count": len(found)},
                )
                return found

        logger.debug(f"No values found for {path}", extra={"path": path, "array_index": array_index})
        return []

    def _find(
        self,
        obj: Any,
        label: str,
        target: str,
        array_index: int | None,
        depth: int,
    ) -> list[ResolvedField]:
        results: list[ResolvedField] = []

        if self.max_depth is not None and depth > self.max_depth:
            return results
        if not self.field_source.is_structured(obj):
            return results

        try:
            fields = self.field_source.list_fields(obj)
        except Exception as e:
            logger.debug(
                f"Cannot list fields of {type(obj).__name__} at {label}",
                extra={"path": label, "error_type": type(e).__name__},
            )
            return results

        for info in fields:
            full_path = f"{label}.{info.name}"
            try:
                if full_path == target:
                    results.extend(self._leaf(obj, info, full_path, array_index))
                    return results

                if not target.startswith(full_path + "."):
                    continue

                if info.is_sequence:
                    remaining = target.count(".") - full_path.count(".")
                    if array_index is not None and remaining == 1:
                        element = info.value[array_index]
                        results.extend(self._find(element, full_path, target, array_index, depth + 1))
                    else:
                        for element in info.value:
                            results.extend(self._find(element, full_path, target, array_index, depth + 1))
                elif self.field_source.is_structured(info.value):
                    results.extend(self._find(info.value, full_path, target, array_index, depth + 1))
            except Exception as e:
                logger.debug(
                    f"Skipping field {full_path}",
                    extra={"path": full_path, "error_type": type(e).__name__},
                )
                continue

        return results

    def _leaf(
        self,
        owner: Any,
        info: FieldInfo,
        full_path: str,
        array_index: int | None,
    ) -> list[ResolvedField]:
        if not info.is_sequence:
            if info.value is None:
                return []
            return [self._make(owner, info, full_path, None, info.value)]

        sequence: Sequence[Any] = info.value
        if array_index is not None:
            if not 0 <= array_index < len(sequence) or sequence[array_index] is None:
                return []
            return [self._make(owner, info, full_path, array_index, sequence[array_index])]

        return [
            self._make(owner, info, full_path, index, element)
            for index, element in enumerate(sequence)
            if element is not None
        ]

    def _make(self, owner: Any, info: FieldInfo, full_path: str, index: int | None, value: Any) -> ResolvedField:
        return ResolvedField(
            owner=owner,
            field_name=info.name,
            path=full_path,
            index=index,
            raw_value=value,
            value=self.field_source.render(value),
        )
