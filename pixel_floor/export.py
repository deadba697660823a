"""
Save generated tiles, variations and previews as PNG files.
"""

from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from .composer import GenerationResult
from .preview import compose_mosaic
from .render import render_tile

PathLike = Union[str, Path]


def result_filename(seed: str) -> str:
    return f"result-{seed}.png"


def variation_filename(index: int, seed: str) -> str:
    return f"variation-{index}-{seed}.png"


def preview_filename(seed: str) -> str:
    return f"preview-{seed}.png"


def _save(img: Image.Image, output_dir: PathLike, filename: str) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    img.save(path)
    return path


def export_result(generation: GenerationResult, output_dir: PathLike) -> Path:
    config = generation.config
    img = render_tile(generation.result, config.width, config.height)
    return _save(img, output_dir, result_filename(generation.seed))


def export_variations(generation: GenerationResult, output_dir: PathLike) -> List[Path]:
    config = generation.config
    paths = []
    for i, tile in enumerate(generation.variations):
        img = render_tile(tile, config.width, config.height)
        paths.append(_save(img, output_dir, variation_filename(i, generation.seed)))
    return paths


def export_preview(generation: GenerationResult, output_dir: PathLike,
                   mosaic: Optional[Image.Image] = None) -> Path:
    config = generation.config
    if mosaic is None:
        mosaic = compose_mosaic(generation.tiles, config.width, config.height,
                                config.preview_scale)
    return _save(mosaic, output_dir, preview_filename(generation.seed))


def export_all(generation: GenerationResult, output_dir: PathLike) -> List[Path]:
    paths = [export_result(generation, output_dir)]
    paths.extend(export_variations(generation, output_dir))
    paths.append(export_preview(generation, output_dir))
    return paths
