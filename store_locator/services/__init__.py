from .editor import ActionResult, EditorController, SaveReport
from .gateway import LocationGateway
from .geocoding import Coordinates, GeocodingClient, google_maps_search_url
from .working_set import LocationWorkingSet
