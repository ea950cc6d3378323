from .csv_writer import CSVWriter
from .json_writer import JSONWriter

__all__ = ['CSVWriter', 'JSONWriter']
