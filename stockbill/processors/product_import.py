"""Product CSV import processor.

Rows are matched to the catalog by SKU (case-insensitive): known SKUs are
updated with the columns that have a value, unknown SKUs are added.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Set, Tuple

import pandas as pd

from ..errors import StockbillError, ValidationError
from ..models import GST_RATES, PRODUCT_CATEGORIES, NewProduct, ProductUpdate, Unit
from ..stores.catalog import CatalogStore
from ..utils import to_decimal
from ..utils.csv_normalization import normalize_cell, normalize_dataframe_columns, parse_int
from .base import BaseProcessor
from .error_tracker import ErrorTracker

class ProductImportProcessor(BaseProcessor):
    """Create or update catalog products from CSV rows."""

    # Product field -> accepted CSV headers, first match wins
    FIELD_MAPPINGS = {
        'name': ['Name', 'Product Name'],
        'sku': ['SKU', 'Sku'],
        'hsn': ['HSN', 'HSN Code'],
        'mrp': ['MRP'],
        'selling_price': ['Selling Price', 'Price'],
        'purchase_price': ['Purchase Price', 'Cost'],
        'quantity': ['Quantity', 'Stock'],
        'unit': ['Unit'],
        'category': ['Category'],
        'low_stock_threshold': ['Low Stock Threshold', 'Reorder Level'],
        'gst_rate': ['GST Rate', 'GST'],
        'description': ['Description'],
    }

    MONEY_FIELDS = ('mrp', 'selling_price', 'purchase_price')
    INT_FIELDS = ('quantity', 'low_stock_threshold', 'gst_rate')

    def __init__(
        self,
        catalog: CatalogStore,
        batch_size: int = 100,
        error_limit: int = 1000,
        debug: bool = False
    ):
        super().__init__(catalog, batch_size, error_limit, debug)
        self.error_tracker = ErrorTracker()

        # SKUs seen across batches, lower-cased
        self.processed_skus: Set[str] = set()

        self.stats.created = 0
        self.stats.updated = 0
        self.stats.skipped = 0
        self.stats.validation_errors = 0

    def _header_mapping(self, columns) -> Dict[str, str]:
        mapping = {}
        for field_name, possible_names in self.FIELD_MAPPINGS.items():
            for name in possible_names:
                if name in columns:
                    mapping[field_name] = name
                    break
        return mapping

    def validate_data(self, df: pd.DataFrame) -> Tuple[List[str], List[str]]:
        """Validate data before processing.

        Args:
            df: DataFrame to validate

        Returns:
            Tuple of (critical_issues, warnings)
        """
        critical_issues = []
        warnings = []

        df = normalize_dataframe_columns(df)
        mapping = self._header_mapping(df.columns)

        missing = [
            self.FIELD_MAPPINGS[field_name][0]
            for field_name in ('name', 'sku')
            if field_name not in mapping
        ]
        if missing:
            critical_issues.append(f"Missing required columns: {', '.join(missing)}")
            return critical_issues, warnings

        empty_skus = df[df[mapping['sku']].map(normalize_cell).isna()]
        if not empty_skus.empty:
            warnings.append(
                f"Found {len(empty_skus)} rows with missing SKUs that will be skipped. "
                f"First few row numbers: {', '.join(map(str, empty_skus.index[:3]))}"
            )

        skus = df[mapping['sku']].map(normalize_cell).dropna().astype(str).str.strip().str.lower()
        duplicated = skus[skus.duplicated()]
        if not duplicated.empty:
            warnings.append(
                f"Found {len(duplicated)} repeated SKUs; only the first row for each is imported. "
                f"First few: {', '.join(duplicated.head(3).tolist())}"
            )

        if 'category' in mapping:
            categories = df[mapping['category']].map(normalize_cell).dropna()
            unknown = sorted(set(categories) - set(PRODUCT_CATEGORIES))
            if unknown:
                warnings.append(f"Unknown categories will be rejected: {', '.join(map(str, unknown[:3]))}")

        if 'gst_rate' in mapping:
            rates = df[mapping['gst_rate']].map(parse_int).dropna()
            bad_rates = sorted({int(rate) for rate in rates} - set(GST_RATES))
            if bad_rates:
                warnings.append(f"Unsupported GST rates will be rejected: {', '.join(map(str, bad_rates))}")

        if 'selling_price' not in mapping:
            warnings.append("No price column; only existing SKUs can be updated")

        return critical_issues, warnings

    def _parse_unit(self, value: Any) -> Any:
        text = str(value).strip().lower()
        for unit in Unit:
            if unit.value.lower() == text or unit.name.lower() == text:
                return unit
        # Left unparsed so validation reports it against the unit field
        return value

    def _row_fields(self, row: pd.Series, mapping: Dict[str, str]) -> Dict[str, Any]:
        """Fields present on a row, parsed to product types.

        Unparsable values are kept raw so the catalog's validation rejects
        them with a field error.
        """
        fields = {}
        for field_name, column in mapping.items():
            value = normalize_cell(row.get(column))
            if value is None:
                continue
            if field_name in self.MONEY_FIELDS:
                parsed = to_decimal(value)
                fields[field_name] = parsed if parsed is not None else value
            elif field_name in self.INT_FIELDS:
                parsed = parse_int(value)
                fields[field_name] = parsed if parsed is not None else value
            elif field_name == 'unit':
                fields[field_name] = self._parse_unit(value)
            else:
                fields[field_name] = str(value).strip()
        return fields

    def _new_product(self, fields: Dict[str, Any]) -> NewProduct:
        return NewProduct(
            name=fields.get('name', ''),
            sku=fields['sku'],
            hsn=fields.get('hsn', ''),
            selling_price=fields.get('selling_price'),
            quantity=fields.get('quantity', 0),
            category=fields.get('category'),
            mrp=fields.get('mrp', Decimal('0')),
            purchase_price=fields.get('purchase_price', Decimal('0')),
            unit=fields.get('unit', Unit.PCS),
            low_stock_threshold=fields.get('low_stock_threshold', 5),
            gst_rate=fields.get('gst_rate', 18),
            description=fields.get('description')
        )

    def _import_row(self, fields: Dict[str, Any]) -> Tuple[str, Optional[str]]:
        """Create or update one product. Returns (action, product_id)."""
        existing = self.catalog.get_by_sku(fields['sku'])
        if existing is None:
            product = self.catalog.add(self._new_product(fields))
            self.stats.created += 1
            return 'created', product.id

        changes = {
            name: value
            for name, value in fields.items()
            if name != 'sku' and getattr(existing, name) != value
        }
        if not changes:
            self.stats.skipped += 1
            return 'skipped', existing.id

        self.catalog.update(existing.id, ProductUpdate(**changes))
        self.stats.updated += 1
        return 'updated', existing.id

    def _process_batch(self, batch_df: pd.DataFrame) -> pd.DataFrame:
        """Process a batch of product rows.

        Args:
            batch_df: DataFrame containing batch of rows to process

        Returns:
            One result row per input row: sku, action, product_id, message
        """
        if self.debug:
            self.logger.debug(f"Processing batch of {len(batch_df)} rows")

        batch_df = normalize_dataframe_columns(batch_df)
        mapping = self._header_mapping(batch_df.columns)
        if 'sku' not in mapping:
            raise ValueError("Could not find SKU column")

        results = []
        for idx, row in batch_df.iterrows():
            fields = self._row_fields(row, mapping)
            sku = fields.get('sku')
            if not sku:
                self.stats.skipped += 1
                results.append({'sku': None, 'action': 'skipped', 'product_id': None, 'message': 'Missing SKU'})
                continue
            if sku.lower() in self.processed_skus:
                self.stats.skipped += 1
                results.append({'sku': sku, 'action': 'skipped', 'product_id': None, 'message': 'Repeated SKU'})
                continue
            self.processed_skus.add(sku.lower())

            try:
                action, product_id = self._import_row(fields)
                results.append({'sku': sku, 'action': action, 'product_id': product_id, 'message': None})
            except ValidationError as e:
                self.stats.validation_errors += 1
                self.stats.total_errors += 1
                for field_name, message in e.errors.items():
                    self.error_tracker.add_error('validation', f"{field_name}: {message}", {'row': idx, 'sku': sku})
                if self.debug:
                    self.logger.debug(f"Validation errors for {sku}: {e.errors}")
                results.append({'sku': sku, 'action': 'error', 'product_id': None, 'message': str(e)})
            except StockbillError as e:
                # Storage failures stop the batch; the catalog is unchanged for this row
                self.error_tracker.add_error('persistence', str(e), {'row': idx, 'sku': sku})
                raise

        return pd.DataFrame(results, columns=['sku', 'action', 'product_id', 'message'])

    def process_file(self, file_path: str) -> Dict[str, Any]:
        """Import a product CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            Dict with success flag, summary stats and error summary
        """
        self.logger.info(f"Importing products from {file_path}")
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        result = self.process(df)

        stats = self.get_stats()
        return {
            'success': self.stats.total_errors == 0,
            'summary': {
                'stats': stats,
                'errors': self.error_tracker.get_summary()
            },
            'results': result
        }
