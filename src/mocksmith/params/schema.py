"""
Parameter schema: declarations, coercion and validation for every producer.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Mapping

from mocksmith.errors import CoercionError, InternalError, NotFoundError, ValidationError
from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.params.coercion import coerce_value

logger = logging.getLogger(__name__)


class ParameterSchema:
    """
    Holds the GeneratorInfo of every registered producer.

    Registration happens while an engine is being built; once ``close()`` is
    called the schema is read-only and safe to share between threads.
    """

    def __init__(self):
        self._infos: Dict[str, Dict[str, GeneratorInfo]] = {}
        self._lock = threading.Lock()
        self._closed = False

    def register(self, info: GeneratorInfo) -> None:
        """Register the parameter declarations of one producer."""
        with self._lock:
            if self._closed:
                raise InternalError(
                    f"cannot register {info.industry}/{info.name}: parameter schema is closed"
                )
            industry = self._infos.setdefault(info.industry, {})
            if info.name in industry:
                raise InternalError(
                    f"parameters for {info.industry}/{info.name} registered twice",
                    industry=info.industry,
                    generator=info.name,
                )
            industry[info.name] = info

    def close(self) -> None:
        """End the registration phase."""
        with self._lock:
            self._closed = True

    def info(self, industry: str, name: str) -> GeneratorInfo:
        """Return the GeneratorInfo for a producer."""
        try:
            return self._infos[industry][name]
        except KeyError:
            raise NotFoundError(
                f"generator '{name}' not found in industry '{industry}'",
                industry=industry,
                generator=name,
            ) from None

    def all_infos(self) -> Dict[str, Dict[str, GeneratorInfo]]:
        """Return every declaration, industry -> name -> info, sorted by name."""
        return {
            industry: {name: gens[name] for name in sorted(gens)}
            for industry, gens in sorted(self._infos.items())
        }

    def coerce_and_validate(
        self,
        industry: str,
        name: str,
        raw: Mapping[str, Any] | None,
    ) -> Dict[str, Any]:
        """
        Build the validated parameter map for a producer.

        Defaults are applied first, then raw values matching a declared
        parameter are coerced to its type; undeclared values pass through
        unchanged. Required presence and type-specific constraints are
        checked last.

        Returns:
            A fresh dictionary; ``raw`` is never modified.
        """
        info = self.info(industry, name)
        params: Dict[str, Any] = {}

        for param in info.parameters:
            if param.default is not None:
                params[param.name] = _copy_default(param.default)

        for key, value in (raw or {}).items():
            if key.startswith("_"):
                raise ValidationError(
                    "parameter names starting with '_' are reserved",
                    industry=industry,
                    generator=name,
                    parameter=key,
                )
            param = info.get_parameter(key)
            if param is None:
                params[key] = value
                continue
            try:
                params[key] = coerce_value(param.type, value, name=key)
            except CoercionError as exc:
                raise CoercionError(
                    exc.message, industry=industry, generator=name, parameter=key
                ) from exc

        for param in info.parameters:
            if param.required and param.name not in params:
                raise ValidationError(
                    "required parameter is missing",
                    industry=industry,
                    generator=name,
                    parameter=param.name,
                )
            if param.name in params:
                self._check_constraints(info, param, params[param.name])

        return params

    @staticmethod
    def _check_constraints(info: GeneratorInfo, param: ParameterDef, value: Any) -> None:
        def fail(message: str) -> None:
            raise ValidationError(
                message,
                industry=info.industry,
                generator=info.name,
                parameter=param.name,
            )

        if param.type in (ParamType.INT, ParamType.FLOAT):
            if param.min is not None and value < param.min:
                fail(f"value {value} is less than minimum {param.min}")
            if param.max is not None and value > param.max:
                fail(f"value {value} is greater than maximum {param.max}")
        elif param.type == ParamType.SELECT:
            if value not in param.options:
                fail(f"value '{value}' is not one of {', '.join(param.options)}")
        elif param.type == ParamType.STRING_LIST:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                fail("expected a list of strings")
            if param.required and not value:
                fail("list must contain at least one value")


def _copy_default(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value

