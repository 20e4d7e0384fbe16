from .table import InterpolableTable, MemoizingTable
