"""Adapters from JobConfiguration sections to application DTOs."""

from stockcut.application.config.schema import JobConfiguration, RingJobConfig
from stockcut.application.dtos import LinearJobInput, PlateJobInput, RingJobInput
from stockcut.domain import LinearItemSpec, RectItemSpec
from stockcut.domain.services import RingPatternParams


def config_to_linear_job(config: JobConfiguration) -> LinearJobInput | None:
    """Build the 1D job input, or None if the file has no linear section.

    Example:
        >>> config = load_config(Path("job.json"))
        >>> job = config_to_linear_job(config)
        >>> result = OptimizeLinearCommand().execute(job)
    """
    linear = config.linear
    if linear is None:
        return None
    return LinearJobInput(
        items=[
            LinearItemSpec(id=item.id, length=item.length, quantity=item.quantity)
            for item in linear.items
        ],
        material_length=linear.material_length,
        algorithm=linear.algorithm,
        kerf=linear.kerf,
    )


def config_to_plate_job(config: JobConfiguration) -> PlateJobInput | None:
    """Build the 2D job input, or None if the file has no plate section."""
    plate = config.plate
    if plate is None:
        return None
    return PlateJobInput(
        items=[
            RectItemSpec(
                id=item.id,
                width=item.width,
                height=item.height,
                quantity=item.quantity,
                can_rotate=item.can_rotate,
            )
            for item in plate.items
        ],
        plate_width=plate.plate_width,
        plate_height=plate.plate_height,
        algorithm=plate.algorithm,
        kerf=plate.kerf,
    )


def ring_config_to_params(rings: RingJobConfig) -> RingPatternParams:
    """Map a rings section onto the domain parameters."""
    return RingPatternParams(
        small_ring_a=rings.small_ring_a,
        big_ring_a=rings.big_ring_a,
        small_ring_b=rings.small_ring_b,
        big_ring_b=rings.big_ring_b,
        multiplier=rings.multiplier,
        kerf_width=rings.kerf,
    )


def config_to_ring_job(config: JobConfiguration) -> RingJobInput | None:
    """Build the FF-CA-01 job input, or None if the file has no rings section."""
    rings = config.rings
    if rings is None:
        return None
    return RingJobInput(
        params=ring_config_to_params(rings),
        material_length=rings.material_length,
        algorithm=rings.algorithm,
    )
