"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Gazetteer storage (text files)
- Place extraction (Gemini-backed and heuristic) and matching
- Speech services (ElevenLabs)
- Routing and geocoding services (Geoapify, Nominatim)
- Rendering engines (Folium)
- Caching systems (in-memory, null)
"""
