"""
GraphQL documents sent to the remote catalog.
"""

CATEGORY_FIELDS = "id name url_path"

PRODUCT_FIELDS = """
    __typename
    id
    sku
    name
    url_key
    image { url label }
    ... on ConfigurableProduct {
        variants {
            attributes { code label value_index }
            product { __typename id sku name url_key image { url label } }
        }
    }
"""

PRODUCT_BY_SKU_QUERY = """
query ProductBySku($sku: String!) {
    products(filter: { sku: { eq: $sku } }) {
        items { %s }
    }
}
""" % PRODUCT_FIELDS

CATEGORY_PRODUCTS_QUERY = """
query CategoryProducts($categoryId: String!, $pageSize: Int!) {
    products(filter: { category_id: { eq: $categoryId } }, pageSize: $pageSize) {
        items { %s }
    }
}
""" % PRODUCT_FIELDS


def build_category_tree_query(depth: int) -> str:
    """
    Build the category tree query.

    GraphQL has no recursive selections, so ``children`` is nested
    explicitly ``depth`` levels below the root.
    """
    selection = CATEGORY_FIELDS
    for _ in range(depth):
        selection = f"{CATEGORY_FIELDS} children {{ {selection} }}"

    return (
        "query CategoryTree($id: Int!) {\n"
        f"    category(id: $id) {{ {selection} }}\n"
        "}\n"
    )
