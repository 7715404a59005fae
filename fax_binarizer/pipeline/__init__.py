from .fax_converter import convert_to_ccitt4, convert_directory, output_path_for
