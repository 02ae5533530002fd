"""
Air Postcard Drawing Module

Stroke building, smoothing, simplification, history and rendering.
"""
from .geometry import Point, Stroke, Compositing, distance, lerp, clamp, generate_stroke_id
from .stroke_builder import StrokeBuilder, LiveSegment, FrameResult, velocity_width
from .curve_smoother import smooth
from .path_simplifier import simplify
from .history import StrokeHistory
from .renderer import Renderer
from .pipeline import DrawingPipeline, PipelineState

__all__ = [
    'Point',
    'Stroke',
    'Compositing',
    'distance',
    'lerp',
    'clamp',
    'generate_stroke_id',
    'StrokeBuilder',
    'LiveSegment',
    'FrameResult',
    'velocity_width',
    'smooth',
    'simplify',
    'StrokeHistory',
    'Renderer',
    'DrawingPipeline',
    'PipelineState',
]
