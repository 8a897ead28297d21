"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Deterministic analysis used when the generator is unavailable or fails.
"""

from __future__ import annotations

from .types import AnalysisRequest


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def render_fallback_analysis(request: AnalysisRequest) -> str:
    """Summarize the scan locally from the search results alone."""
    results = request.search_results
    query = request.query
    location = request.location
    distance = request.distance

    avg_rating = _mean([r.rating for r in results])
    avg_reviews = round(_mean([float(r.reviews) for r in results]))
    categorized = sum(1 for r in results if r.category)

    lines = [
        f'**Local SEO Analysis for "{query}" in {location}**',
        "",
        "**Competitive Landscape:**",
        f"Based on the {request.grid_size} grid scan within {distance:g} miles, "
        f"we found {len(results)} competing businesses. The top results show "
        f"average ratings of {avg_rating:.1f}/5 stars.",
        "",
        "**Key Insights:**",
        f"- Review Volume: top competitors average {avg_reviews} reviews",
        f"- Distance Optimization: most top results are within "
        f"{distance * 0.6:.1f} miles of the search location",
        f"- Category Consistency: {categorized} businesses have proper category classification",
        "",
        "**Optimization Opportunities:**",
        "1. Review Management: increase review volume and keep ratings high",
        "2. Local Content: create location-specific content and landing pages",
        "3. NAP Consistency: keep business name, address and phone identical across listings",
        "4. Category Optimization: use specific, relevant business categories",
        f"5. Distance Targeting: optimize for searches within a {distance:g} mile radius",
        "",
        "**Action Items:**",
        "- Monitor competitor review patterns and respond to customer feedback",
        f'- Create local landing pages targeting "{query}" + "{location}"',
        "- Optimize the Google Business profile with relevant keywords",
        "- Encourage customer reviews and maintain a 4.5+ star rating",
    ]
    top = results[:5]
    if top:
        lines.append("")
        lines.append("**Top Competitors:**")
        for index, row in enumerate(top, start=1):
            lines.append(
                f"{index}. {row.name} ({row.rating:.1f}/5, {row.reviews} reviews, "
                f"{row.distance:.1f} mi)"
            )
    return "\n".join(lines) + "\n"
