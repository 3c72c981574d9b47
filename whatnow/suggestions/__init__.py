"""
Intent-driven suggestion core.

Responsibilities:
- Resolve the fixed policy (result cap, category allow-list, route, novelty) for an intent.
- Filter the upstream candidate pool down to the admissible categories.
- Materialise AI-suggested stops into a time-and-distance-consistent itinerary.
- Return either a capped suggestion list or a single itinerary per request.
"""
