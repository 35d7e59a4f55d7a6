from .json_file_storage import JsonFileStorage

__all__ = ["JsonFileStorage"]
