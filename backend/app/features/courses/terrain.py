"""
Terrain difficulty classification.

Single source of truth for terrain-factor bands. Bands are evaluated
top-down, the first lower bound the factor reaches wins.
"""

from app.shared.constants import TerrainDifficulty

# (lower_bound, category), ordered from fastest to slowest
TERRAIN_DIFFICULTY_BANDS = [
    (1.2, TerrainDifficulty.FAST),
    (0.8, TerrainDifficulty.MODERATE),
    (0.0, TerrainDifficulty.HILLS),
]

TERRAIN_LABELS = {
    TerrainDifficulty.FAST: "Fast Section (Downhill/Flat)",
    TerrainDifficulty.MODERATE: "Moderate Terrain",
    TerrainDifficulty.HILLS: "Challenging Hills",
}


def classify_terrain(terrain_factor: float) -> TerrainDifficulty:
    """
    Classify a terrain factor.

    Args:
        terrain_factor: Speed multiplier of the segment (e.g. 1.25)

    Returns:
        TerrainDifficulty (1.25 -> FAST, 1.0 -> MODERATE, 0.65 -> HILLS)
    """
    for lower_bound, category in TERRAIN_DIFFICULTY_BANDS:
        if terrain_factor >= lower_bound:
            return category
    return TerrainDifficulty.HILLS


def terrain_label(terrain_factor: float) -> str:
    """Human-readable legend entry for a terrain factor."""
    return TERRAIN_LABELS[classify_terrain(terrain_factor)]
