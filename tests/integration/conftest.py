# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Fixtures for end-to-end Rust analysis tests."""

from pathlib import Path
from typing import Dict

import pytest

from umlgraph.analyzers import RustAnalyzer
from umlgraph.config import Config

# A small crate exercising every relation kind across modules
SAMPLE_CRATE: Dict[str, str] = {
    "src/lib.rs": """
pub mod geometry;
pub mod shapes;
""",
    "src/geometry.rs": """
pub struct Point {
    pub x: f64,
    pub y: f64,
}

pub fn origin() -> Point {
    Point { x: 0.0, y: 0.0 }
}
""",
    "src/shapes/mod.rs": """
use crate::geometry::{Point, origin};

pub trait Shape {
    fn area(&self) -> f64;
}

pub struct Circle {
    center: Point,
    radius: f64,
}

impl Circle {
    pub fn unit() -> Circle {
        Circle { center: origin(), radius: 1.0 }
    }
}

impl Shape for Circle {
    fn area(&self) -> f64 {
        3.14 * self.radius * self.radius
    }
}

pub fn describe() {
    origin();
}
""",
    "src/shapes/canvas.rs": """
pub struct Canvas {
    parent: *const Canvas,
    layer: *mut Layer,
}

pub struct Layer {}
""",
}


@pytest.fixture
def analyzer(tmp_path) -> RustAnalyzer:
    """Analyzer with default configuration."""
    return RustAnalyzer(config=Config(config_path=tmp_path / "missing.yml"))


@pytest.fixture
def sample_crate(tmp_path) -> Path:
    """Write SAMPLE_CRATE under tmp_path and return the crate root."""
    root = tmp_path / "sample_crate"
    for relative, content in SAMPLE_CRATE.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root
