"""
Transformation Layer - Pure functions over lookup data

- Shapes raw upstream records into the caller-facing contract
- Decodes the attributes encoded in the NIK itself
- Loads the regional code table
"""
