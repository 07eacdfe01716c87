"""
import_engine.field_map - CSV column names consumed by the importer.

Any column not listed here is ignored.
"""

COL_SKU               = "sku"
COL_PARENT_SKU        = "parent_sku"
COL_NAME              = "name"
COL_DESCRIPTION       = "description"
COL_SHORT_DESCRIPTION = "short_description"
COL_PRICE             = "regular_price"
COL_WEIGHT            = "weight_lbs"
COL_STOCK             = "stock"
COL_ALLOY             = "attribute_1_values"
COL_SIZE              = "attribute_2_values"
COL_IN_STOCK          = "in_stock"

# Fallbacks applied while building variant records
DEFAULT_ALLOY = "T304"
DEFAULT_SIZE = ""

# in_stock is true only for this exact value
IN_STOCK_SENTINEL = "t"
