"""
Qt user interface.
"""
from .main_window import MainWindow
from .search_bar import SearchBar

__all__ = ['MainWindow', 'SearchBar']
