"""
Command-line interface for Newton fractal generation.

This module provides the CLI for rendering Newton fractal images and for
inspecting the available polynomials and palettes.
"""

import click
import json
import sys
from pathlib import Path
from typing import List, Optional
import logging
import time

from .. import __version__
from ..api import FractalRenderer, RenderConfig
from ..core.fractal_types import POLYNOMIAL_PRESETS, create_fractal
from ..io.config import load_config_from_args
from ..rendering.coloring import get_palette, list_palettes
from ..rendering.image_output import DEFAULT_OUTPUT_PATH

logger = logging.getLogger(__name__)

# Sample renders cover symmetric bounds, where some polynomials keep points
# on an invariant line forever
SAMPLE_STEP_LIMIT = 1000


def parse_coefficients(text: str) -> List[List[float]]:
    """
    Parse a coefficient list such as ``"1;0;0;1"`` or ``"1,0;0,0;0,0;1,0"``.

    Terms are separated by ``;`` with the constant term first; each term is
    ``re`` or ``re,im``.
    """
    coefficients = []
    for term in text.split(';'):
        parts = [p.strip() for p in term.split(',')]
        if len(parts) == 1:
            parts.append('0')
        if len(parts) != 2:
            raise ValueError(f"Invalid coefficient '{term}'. Use 're' or 're,im'")
        coefficients.append([float(parts[0]), float(parts[1])])
    return coefficients


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--config', type=click.Path(exists=True, dir_okay=False), help='JSON configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def main(ctx, version, config, verbose, quiet):
    """
    Newton Fractal Generator - render Newton-Raphson basins of polynomial roots.
    """
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO,
                            format='%(levelname)s: %(message)s')

    if version:
        click.echo(f"Newton Fractal Generator v{__version__}")
        click.echo(f"Python: {sys.version}")
        if ctx.invoked_subcommand is None:
            ctx.exit(0)

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config
    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet

    if ctx.invoked_subcommand is None and not version:
        click.echo(ctx.get_help())


@main.command(context_settings={'ignore_unknown_options': True})
@click.argument('width', type=int)
@click.argument('height', type=int)
@click.argument('xmin', type=float)
@click.argument('xmax', type=float)
@click.argument('ymin', type=float)
@click.argument('ymax', type=float)
@click.argument('output', type=click.Path(dir_okay=False), required=False)
@click.option('--preset', type=click.Choice(sorted(POLYNOMIAL_PRESETS)), help='Polynomial preset')
@click.option('--coefficients', help='Polynomial coefficients, constant first: "1;0;0;1" or "re,im;..."')
@click.option('--palette', help='Root color palette name')
@click.option('--max-iter', type=int, help='Number of small Newton steps per pixel')
@click.option('--tolerance', type=float, help='Step size counted as converging')
@click.option('--root-tolerance', type=float, help='Distance at which two roots are the same')
@click.option('--modern-indexing', is_flag=True, help='Zero-based, first-match root indices')
@click.option('--early-exit', is_flag=True, help='Count every Newton step toward the budget')
@click.option('--step-limit', type=int, help='Hard cap on total steps per pixel')
@click.option('--metadata/--no-metadata', default=None, help='Embed render metadata in the output')
@click.pass_context
def render(ctx, width, height, xmin, xmax, ymin, ymax, output, preset, coefficients,
           palette, max_iter, tolerance, root_tolerance, modern_indexing, early_exit,
           step_limit, metadata):
    """
    Render a Newton fractal image.

    WIDTH HEIGHT: Image size in pixels
    XMIN XMAX YMIN YMAX: Complex plane bounds
    OUTPUT: Output image file path (default: out.png)
    """
    if output and output.startswith('-'):
        # Unknown options are let through for negative bounds and land here
        raise click.UsageError(f"No such option: {output}", ctx=ctx)

    try:
        config = load_config_from_args(ctx.obj.get('config_file'))
        config.width = width
        config.height = height
        config.bounds = (xmin, xmax, ymin, ymax)

        overrides = {
            'palette': palette,
            'max_iterations': max_iter,
            'iteration_tolerance': tolerance,
            'root_tolerance': root_tolerance,
            'step_limit': step_limit,
            'save_metadata': metadata,
        }
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        if modern_indexing:
            config.legacy_indexing = False
        if early_exit:
            config.retry_large_steps = False

        if coefficients:
            try:
                config.coefficients = parse_coefficients(coefficients)
            except ValueError as e:
                raise click.BadParameter(str(e), param_hint='--coefficients')
        elif preset:
            config.coefficients = list(POLYNOMIAL_PRESETS[preset].coefficients)

        fractal = create_fractal(coefficients=config.coefficients)
        renderer = FractalRenderer(config)

        def progress_callback(progress):
            if ctx.obj.get('verbose'):
                click.echo(f"Progress: {progress*100:.1f}%")

        output_path = Path(output or DEFAULT_OUTPUT_PATH)
        if not ctx.obj.get('quiet'):
            click.echo(f"Rendering {fractal.get_description()}...")
        start_time = time.time()

        result = renderer.render(fractal, output_path, progress_callback)

        if not ctx.obj.get('quiet'):
            click.echo(f"Render complete: {time.time() - start_time:.2f}s")
            click.echo(f"Roots found: {len(result.roots)}")
            click.echo(f"Saved: {result.output_path}")

    except click.ClickException:
        raise
    except (ValueError, RuntimeError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)


@main.command()
@click.option('--json', 'as_json', is_flag=True, help='Print presets as JSON')
def presets(as_json):
    """List available polynomial presets."""
    if as_json:
        click.echo(json.dumps({name: parameters.to_dict()
                               for name, parameters in POLYNOMIAL_PRESETS.items()}, indent=2))
        return

    click.echo("Polynomial presets:")
    for name, parameters in POLYNOMIAL_PRESETS.items():
        click.echo(f"  {name:12s} {parameters.description}")


@main.command()
def palettes():
    """List available color palettes."""
    click.echo("Color palettes:")
    for name in list_palettes():
        palette = get_palette(name)
        click.echo(f"  {name:12s} {len(palette)} colors")


@main.command()
@click.option('--preset', type=click.Choice(sorted(POLYNOMIAL_PRESETS)), default='cubic',
              help='Polynomial preset')
@click.option('--coefficients', help='Polynomial coefficients, constant first')
@click.option('--sample-size', type=click.IntRange(min=1), default=16, help='Size of the sample render')
def info(preset, coefficients, sample_size):
    """Show the polynomial, its derivative and the roots it converges to."""
    try:
        parsed: Optional[List[List[float]]] = parse_coefficients(coefficients) if coefficients else None
        fractal = create_fractal(preset, parsed)
    except ValueError as e:
        raise click.BadParameter(str(e))

    config = RenderConfig(width=sample_size, height=sample_size,
                          bounds=fractal.get_recommended_bounds(),
                          coefficients=list(fractal.parameters.coefficients),
                          step_limit=SAMPLE_STEP_LIMIT)
    result = FractalRenderer(config).render(fractal)

    click.echo(f"Polynomial: {fractal.polynomial}")
    click.echo(f"Derivative: {fractal.derivative}")
    click.echo(f"Roots found on a {sample_size}x{sample_size} sample render: {len(result.roots)}")
    for root in result.roots:
        click.echo(f"  {root}")


if __name__ == '__main__':
    main()
