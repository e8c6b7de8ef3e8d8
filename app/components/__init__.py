"""Components for the Synthetic Data Generator application"""
from .api_key_dialog import ApiKeyDialog
from .data_table import DataTableView
from .debug_viewer import DebugViewer
from .field_manager import FieldManager
from .generation_panel import GenerationPanel
from .notifier import Notifier

__all__ = ['ApiKeyDialog', 'DataTableView', 'DebugViewer', 'FieldManager', 'GenerationPanel', 'Notifier']
