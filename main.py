"""
Codec Explorer
Lossy DCT / Haar transform codec with fidelity analysis
"""

import logging
import warnings
from pathlib import Path

import click
import numpy as np

warnings.filterwarnings('ignore', category=RuntimeWarning)

CHROMA_CHOICES = ['444', '422', '420']
TRANSFORM_CHOICES = ['dct', 'dwt', 'block_dwt']
CHANNELS = {'y': 0, 'cr': 1, 'cb': 2}


def _load_source(image_path, synthetic, size):
    from utils.image_io import load_image
    from utils.test_images import generate_demo_image, DEMO_IMAGES

    if synthetic:
        image = generate_demo_image(synthetic, size)
        if image is None:
            raise click.BadParameter(
                f"unknown image '{synthetic}' (choose from {', '.join(DEMO_IMAGES)})",
                param_hint='--synthetic',
            )
        return image
    if image_path is None:
        raise click.UsageError("Give an IMAGE path or --synthetic NAME")
    try:
        return load_image(image_path)
    except ValueError as e:
        raise click.ClickException(str(e))


def _build_config(quality, chroma, transform, no_quantization, prefilter):
    from models.codec_config import CodecConfig

    try:
        return CodecConfig(
            quality=max(1.0, quality),
            quantization=not no_quantization,
            chroma_mode=int(chroma),
            transform=transform,
            use_prefilter=prefilter,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))


def codec_options(func):
    """Shared source and codec flags."""
    options = [
        click.argument('image_path', required=False, type=click.Path(exists=True, dir_okay=False)),
        click.option('--synthetic', '-s', default=None, help='Use a generated test image instead of a file'),
        click.option('--size', default=256, type=int, show_default=True, help='Synthetic image size'),
        click.option('--quality', '-q', default=50.0, type=float, show_default=True,
                     help='Quality 1-100 (values below 1 are raised to 1)'),
        click.option('--chroma', '-c', default='444', type=click.Choice(CHROMA_CHOICES), show_default=True,
                     help='Chroma subsampling mode'),
        click.option('--transform', '-t', default='dct', type=click.Choice(TRANSFORM_CHOICES),
                     show_default=True, help='Plane transform'),
        click.option('--no-quantization', is_flag=True, help='Skip quantization (transform round trip only)'),
        click.option('--prefilter', is_flag=True, help='Blur chroma before subsampling'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
def main(verbose):
    """Codec Explorer - lossy transform coding with fidelity analysis."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )


@main.command()
@codec_options
@click.option('--output', '-o', default='reconstructed.png', show_default=True, type=click.Path(dir_okay=False))
def process(image_path, synthetic, size, quality, chroma, transform, no_quantization, prefilter, output):
    """Compress, reconstruct and report fidelity."""
    from engines.pipeline import compress_reconstruct
    from utils.image_io import save_image

    image = _load_source(image_path, synthetic, size)
    config = _build_config(quality, chroma, transform, no_quantization, prefilter)
    click.echo(f"Image: {image.shape[1]}x{image.shape[0]}")
    click.echo(f"Quality: {config.quality:g}  Chroma: {config.chroma_mode.label}  Transform: {config.transform.name}")

    result, _ = compress_reconstruct(image, config)
    m = result.metrics

    click.echo("\n=== Results ===")
    click.echo(f"PSNR (Y/Cr/Cb):  {m.psnr_y:.2f} / {m.psnr_cr:.2f} / {m.psnr_cb:.2f} dB")
    click.echo(f"SSIM (Y/Cr/Cb):  {m.ssim_y:.4f} / {m.ssim_cr:.4f} / {m.ssim_cb:.4f}")
    click.echo(f"BPP:       {result.bpp:.3f}  ({result.bitrate_label})")
    click.echo(f"Ratio:     {result.compression_ratio:.2f}:1")
    click.echo(f"Time:      {result.process_time_ms + result.analysis_time_ms:.2f} ms")

    save_image(result.reconstructed_image, output)
    click.echo(f"\nSaved: {output}")


@main.command()
@codec_options
@click.option('--block-x', '-x', default=0, type=int, show_default=True)
@click.option('--block-y', '-y', default=0, type=int, show_default=True)
@click.option('--channel', default='y', type=click.Choice(list(CHANNELS)), show_default=True)
def inspect(image_path, synthetic, size, quality, chroma, transform, no_quantization, prefilter,
            block_x, block_y, channel):
    """Print one block's trip through the codec."""
    from engines.session import CodecSession

    image = _load_source(image_path, synthetic, size)
    config = _build_config(quality, chroma, transform, no_quantization, prefilter)
    session = CodecSession.create(image)
    try:
        debug = session.inspect_block(block_x, block_y, CHANNELS[channel], config)
    except ValueError as e:
        raise click.ClickException(str(e))
    finally:
        session.destroy()

    if debug.is_empty():
        click.echo("Full-image DWT has no block structure; nothing to inspect.")
        return
    with np.printoptions(precision=1, suppress=True, linewidth=120):
        for name, grid in zip(('original', 'coefficients', 'quant_table', 'quantized', 'reconstructed'),
                              debug.as_tuple()):
            click.echo(f"--- {name} ---")
            click.echo(str(grid))


@main.command()
@codec_options
@click.option('--start', default=10, type=int, show_default=True)
@click.option('--end', default=90, type=int, show_default=True)
@click.option('--step', default=10, type=int, show_default=True)
def sweep(image_path, synthetic, size, quality, chroma, transform, no_quantization, prefilter,
          start, end, step):
    """PSNR / SSIM / bpp across a range of qualities."""
    from engines.pipeline import quality_sweep

    if step <= 0 or start < 1 or end < start:
        raise click.BadParameter("need 1 <= start <= end and step > 0")
    image = _load_source(image_path, synthetic, size)
    config = _build_config(quality, chroma, transform, no_quantization, prefilter)

    click.echo(f"{'Q':>4} {'PSNR_Y':>8} {'SSIM_Y':>8} {'BPP':>7} {'Ratio':>7}")
    for q, result in quality_sweep(image, config, range(start, end + 1, step)):
        click.echo(f"{q:>4} {result.psnr_y:8.2f} {result.ssim_y:8.4f} {result.bpp:7.3f} {result.compression_ratio:7.2f}")


@main.command()
@codec_options
@click.option('--out-dir', '-o', default='maps', show_default=True, type=click.Path(file_okay=False))
def maps(image_path, synthetic, size, quality, chroma, transform, no_quantization, prefilter, out_dir):
    """Write every session view (reconstruction, planes, diagnostic maps)."""
    from engines.session import CodecSession, ViewMode
    from utils.image_io import save_image

    image = _load_source(image_path, synthetic, size)
    config = _build_config(quality, chroma, transform, no_quantization, prefilter)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    session = CodecSession.create(image)
    try:
        session.update(config)
        for mode in ViewMode:
            path = out / f"{mode.name.lower()}.png"
            save_image(session.render(mode), path)
            click.echo(f"Saved: {path}")
    finally:
        session.destroy()


if __name__ == '__main__':
    main()
