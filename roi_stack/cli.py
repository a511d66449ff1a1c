"""CLI interface for roi-stack."""

import click
from pathlib import Path
import sys
import logging
from loguru import logger as roi_logger
from roi_stack.bounds import get_limits
from roi_stack.crop import crop_with_settings
from roi_stack.io import load_rois, load_volume, save_volume
from roi_stack.models import CropSettings
from roi_stack.points import get_point_coordinates
from roi_stack.selection import select_for_plane


# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

volume_argument = click.argument(
    "volume", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
rois_argument = click.argument(
    "rois", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
channel_option = click.option(
    "--channel", "-c", default=0, type=int, help="Channel to read (default: 0)"
)
timepoint_option = click.option(
    "--timepoint", "-t", default=0, type=int, help="Time point to read (default: 0)"
)


def _load_inputs(volume_path, rois_path, channel=0, timepoint=0):
    logger.info(f"Loading volume: {volume_path}")
    volume = load_volume(volume_path, channel=channel, timepoint=timepoint)
    logger.info(f"Loading ROIs: {rois_path}")
    collection = load_rois(rois_path)
    return volume, collection


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug messages")
def cli(verbose):
    """ROI Stack - Bound and crop image volumes to their ROIs."""
    level = "DEBUG" if verbose else "INFO"
    logging.getLogger().setLevel(level)
    roi_logger.remove()
    roi_logger.add(lambda message: click.echo(message, err=True, nl=False), level=level)


@cli.command()
@volume_argument
@rois_argument
@channel_option
@timepoint_option
def limits(volume, rois, channel, timepoint):
    """
    Print the 3D bounding box of the ROIs in ROIS on VOLUME.

    Output is xmin xmax ymin ymax zmin zmax, with z as 1-based planes.
    """
    try:
        stack, collection = _load_inputs(volume, rois, channel, timepoint)
        box = get_limits(collection, stack)
    except Exception as e:
        click.echo(f"✗ Error processing {volume}: {e}", err=True)
        sys.exit(1)

    if box is None:
        click.echo(f"✗ No valid ROIs in {rois.name}", err=True)
        sys.exit(1)

    click.echo(" ".join(str(v) for v in box.as_tuple()))


@cli.command()
@volume_argument
@rois_argument
@click.argument("plane", type=int)
@channel_option
@timepoint_option
def select(volume, rois, plane, channel, timepoint):
    """
    List the ROIs active on PLANE (1-based).

    ROIs whose label names no plane are active on every plane.
    """
    try:
        stack, collection = _load_inputs(volume, rois, channel, timepoint)
        regions = select_for_plane(collection, stack, plane)
    except Exception as e:
        click.echo(f"✗ Error processing {volume}: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ {len(regions)} ROI(s) on plane {plane}:")
    for region in regions:
        click.echo(
            f"  → {region.label} ({region.x}, {region.y}, "
            f"{region.width}x{region.height})"
        )


@cli.command()
@volume_argument
@rois_argument
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--fill-background/--no-fill-background",
    default=False,
    help="Set pixels outside the ROIs to the fill value",
)
@click.option(
    "--fill-value",
    "-f",
    default=0,
    type=int,
    help="Background and padding value (default: 0)",
)
@click.option(
    "--padding",
    "-p",
    default=0,
    type=click.IntRange(min=0),
    help="Pixels added to each face of the cropped volume (default: 0)",
)
@channel_option
@timepoint_option
def crop(volume, rois, output, fill_background, fill_value, padding, channel, timepoint):
    """
    Crop VOLUME to the ROIs in ROIS and save it to OUTPUT.

    OUTPUT ending in .npy is saved as a NumPy array, anything else as a
    multi-page TIFF.
    """
    settings = CropSettings(
        fill_background=fill_background, fill_value=fill_value, padding=padding
    )

    try:
        stack, collection = _load_inputs(volume, rois, channel, timepoint)
        logger.info(f"Cropping with {settings}")
        cropped = crop_with_settings(collection, stack, settings)
        output_path = save_volume(cropped, output)
    except Exception as e:
        click.echo(f"✗ Error processing {volume}: {e}", err=True)
        logger.exception("Crop failed")
        sys.exit(1)

    depth, height, width = cropped.data.shape
    click.echo(f"✓ Cropped to {width}x{height}x{depth}: {output_path}")


@cli.command()
@volume_argument
@rois_argument
@channel_option
@timepoint_option
def points(volume, rois, channel, timepoint):
    """
    Print the calibrated x, y, z coordinates of point ROIs.
    """
    try:
        stack, collection = _load_inputs(volume, rois, channel, timepoint)
        coordinates = get_point_coordinates(collection, stack)
    except Exception as e:
        click.echo(f"✗ Error processing {volume}: {e}", err=True)
        sys.exit(1)

    if coordinates is None:
        click.echo(f"⚠ No point ROIs in {rois.name}")
        return

    click.echo(f"✓ {len(coordinates)} point(s) ({stack.calibration.unit}):")
    for x, y, z in coordinates:
        click.echo(f"  {x:g} {y:g} {z:g}")


if __name__ == "__main__":
    cli()
