"""
Food Summaries App - Shared Lunch Settlement

A food summary records one lunch: what the company paid for bread,
what was spent on curries and extras, who brought their own food and
which guests members hosted. Recording it settles the costs:

- the company balance pays for the bread,
- everything else is split between the members who did not bring
  food, weighted by the guests each of them hosted,
- members who brought food only pay for the guests they hosted.

Deleting a summary applies the exact inverse of its settlement.
Summaries are never edited in place; an edit is delete + recreate.

Architecture:
- Models: FoodSummary, ExtraMember
- Services: participants (weights), settlement (deltas and their
  inverse), food_summary_management (settle / reverse)
- Views: FoodSummaryViewSet (+ preview action)
"""
