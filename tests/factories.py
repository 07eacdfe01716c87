import factory


class RowFactory(factory.DictFactory):
    """One raw CSV row as the ingestor hands it on."""

    sku = factory.Sequence(lambda n: f"HB-{n:04d}")
    parent_sku = "HB"
    name = "Hex Bolt, 1/4-20 x 1in"
    description = "Fully threaded hex bolt"
    short_description = ""
    regular_price = "1.25"
    weight_lbs = "0.05"
    stock = "100"
    attribute_1_values = "T304"
    attribute_2_values = "M8"
    in_stock = "t"
