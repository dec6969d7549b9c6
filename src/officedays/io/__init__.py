# officedays/io - Input/output handling
from .excel_export import export_filename, export_to_csv, export_to_excel
from .json_loader import load_employees, save_employees

__all__ = ["load_employees", "save_employees", "export_to_excel", "export_to_csv", "export_filename"]
