"""Fixed instruction prompt and response field definitions for masterplan analysis."""

CLASSIFICATION_PROMPT = """You are an expert landscape architect specializing in quantitative analysis of masterplans. Analyze the provided masterplan, which contains a landscape strategy and its legend. Your goal is to classify all distinct surface types according to the simplified Urban Greening Factor categories listed below and estimate the percentage of the total development area each category covers.

The development area is the entire area depicted within the property boundaries, excluding external roads like 'CAMPFIELD ROAD'. Sum of percentages should be approximately 100.

Simplified UGF Categories & Mapping Instructions:
1. TREES_AND_SHRUBS: Includes all proposed trees (T1-T7), structural/ornamental shrub planting, and hedges.
2. GREEN_OPEN_SPACE: Includes rear gardens, communal/open space/verges, species-rich grassland/wildflowers, and attenuation basins.
3. PERMEABLE_SURFACES: Includes communal parking courts, shared surfaces, and private/communal paths made of P.C. paving slabs or block paving.
4. IMPERMEABLE_SURFACES: Includes the footprints of the buildings and any black macadam access roads.
5. INCIDENTAL_PLAY_AREA: Includes the designated Play Area (LAP) and any incidental play features like timber logs.

Your output MUST be a valid JSON array of objects that strictly conforms to the provided schema. Do not include any text or markdown formatting outside of the JSON structure."""

REQUIRED_FIELDS: tuple[str, ...] = ("category", "description", "percentage")

FIELD_DESCRIPTIONS: dict[str, str] = {
    "category": "One of the predefined UGF category names.",
    "description": (
        "A brief description of what this category includes based on the "
        "masterplan legend."
    ),
    "percentage": (
        "The estimated percentage of the total development area covered by "
        "this category."
    ),
}
