"""NavAble - campus place-name resolution and walking directions.

A spoken or typed request ("from Mary Gates Hall to Odegaard") is turned
into a start and an end place from a static campus gazetteer, and from
there into a walking route.

Entry points:
- ``navable.services.PlaceResolutionService.resolve`` (utterance to places)
- ``navable.services.NavigationService.navigate`` (places to route)
- ``python -m navable`` (command line)
"""

__version__ = "0.1.0"
