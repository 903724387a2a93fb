"""Shape inference, rendering, type generation and diffing."""

from .diff import ShapeDiffer, diff_shapes, render_diff, render_diff_spans
from .emit import Emitter, PlainEmitter, SpanEmitter, spans_to_text
from .inference import ShapeInferer, infer_shape
from .render import ShapeRenderer, render_shape, render_shape_source, render_shape_spans
from .stats import describe_stats, json_stats
from .typelang import TypeLangGenerator, generate_type_lang, generate_type_lang_spans
from .values import UNDEFINED, AncestorChain, classify, kind_of

__all__ = [
    "AncestorChain",
    "Emitter",
    "PlainEmitter",
    "ShapeDiffer",
    "ShapeInferer",
    "ShapeRenderer",
    "SpanEmitter",
    "TypeLangGenerator",
    "UNDEFINED",
    "classify",
    "describe_stats",
    "diff_shapes",
    "generate_type_lang",
    "generate_type_lang_spans",
    "infer_shape",
    "json_stats",
    "kind_of",
    "render_diff",
    "render_diff_spans",
    "render_shape",
    "render_shape_source",
    "render_shape_spans",
    "spans_to_text",
]
