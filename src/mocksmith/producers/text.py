"""Text producers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from mocksmith.models import GeneratorInfo, ParameterDef, ParamType
from mocksmith.producers.common import (
    LOWERCASE,
    UPPERCASE,
    bounds,
    case_params,
    faker,
    invalid,
    random_string,
    rng,
)

if TYPE_CHECKING:
    from mocksmith.engine.builder import EngineBuilder


def generate_text(params: Mapping[str, Any]) -> str:
    low, high = bounds(params)
    charset = params.get("charset") or LOWERCASE
    if not isinstance(charset, str):
        raise invalid("charset", "charset must be a string")
    length = rng(params).randint(low, high)
    return random_string(params, length, charset)


def make_sentence(params: Mapping[str, Any], word_count: int) -> str:
    return faker(params).sentence(nb_words=word_count, variable_nb_words=False)


def generate_sentence(params: Mapping[str, Any]) -> str:
    return make_sentence(params, params["word_count"])


def generate_paragraph(params: Mapping[str, Any]) -> str:
    return " ".join(
        make_sentence(params, params["word_count"]) for _ in range(params["sentence_count"])
    )


def generate_word(params: Mapping[str, Any]) -> str:
    return faker(params).word()


def generate_char(params: Mapping[str, Any]) -> str:
    return rng(params).choice(LOWERCASE + UPPERCASE)


def register(builder: EngineBuilder) -> None:
    builder.add(
        GeneratorInfo(
            "base", "text", "Random string with length in [min, max]", "qwhzkeuvbn",
            [
                ParameterDef("min", ParamType.INT, "Minimum length", default=10, min=0),
                ParameterDef("max", ParamType.INT, "Maximum length", default=100, min=0),
                ParameterDef("charset", ParamType.STRING, "Characters to draw from",
                             example="abc123"),
                *case_params(),
            ],
        ),
        generate_text,
    )
    builder.add(
        GeneratorInfo(
            "base", "sentence", "Random sentence", "The quick brown fox jumps over the lazy dog.",
            [
                ParameterDef("word_count", ParamType.INT, "Number of words", default=10, min=3, max=50),
                *case_params(),
            ],
        ),
        generate_sentence,
    )
    builder.add(
        GeneratorInfo(
            "base", "paragraph", "Random paragraph", "First sentence. Second sentence. Third sentence.",
            [
                ParameterDef("sentence_count", ParamType.INT, "Number of sentences",
                             default=3, min=1, max=20),
                ParameterDef("word_count", ParamType.INT, "Words per sentence", default=10, min=3, max=30),
                *case_params(),
            ],
        ),
        generate_paragraph,
    )
    builder.add(
        GeneratorInfo("base", "word", "Random word", "lorem", case_params()),
        generate_word,
    )
    builder.add(
        GeneratorInfo("base", "char", "Random ASCII letter", "x", case_params(affixes=False)),
        generate_char,
    )
