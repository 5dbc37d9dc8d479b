from uniqueness.client.controller import ControllerState, SearchController, create_controller
from uniqueness.client.view import Panel, ResultView

__all__ = ["ControllerState", "Panel", "ResultView", "SearchController", "create_controller"]
