from __future__ import annotations

from bmc_web.domain.models import Canvas

PROMPT_TEMPLATE = """
Analyze the following Business Model Canvas (BMC) data provided in Bengali/English.
Act as a world-class business consultant.
Provide the output strictly in Bengali language (Bangla).

Data:
- Key Partners: {key_partners}
- Key Activities: {key_activities}
- Key Resources: {key_resources}
- Value Propositions: {value_propositions}
- Customer Relationships: {customer_relationships}
- Channels: {channels}
- Customer Segments: {customer_segments}
- Cost Structure: {cost_structure}
- Revenue Streams: {revenue_streams}

Provide a JSON response with:
1. Overall viability score (0-100).
2. Executive summary (short paragraph).
3. SWOT Analysis (Strengths, Weaknesses, Opportunities, Threats) - list of strings.
4. Strategic Suggestions (list of actionable advice).
5. Segment Analysis: Detailed feedback and score (0-10) for {segments}.
"""

SEGMENTS = ("Value Proposition", "Financial Viability", "Market Fit")


def build_prompt(canvas: Canvas) -> str:
    # str.format does not re-interpret braces inside the substituted values
    return PROMPT_TEMPLATE.format(
        key_partners=canvas.key_partners,
        key_activities=canvas.key_activities,
        key_resources=canvas.key_resources,
        value_propositions=canvas.value_propositions,
        customer_relationships=canvas.customer_relationships,
        channels=canvas.channels,
        customer_segments=canvas.customer_segments,
        cost_structure=canvas.cost_structure,
        revenue_streams=canvas.revenue_streams,
        segments=", ".join(f"'{s}'" for s in SEGMENTS),
    ).strip()
