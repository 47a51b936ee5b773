"""
Sync Enums
==========

Closed value sets untuk auth schemes, entity types, sync action dan status.
"""

from enum import Enum


class AuthType(str, Enum):
    API_KEY = 'api_key'
    BEARER = 'bearer'
    BASIC = 'basic'
    OAUTH2 = 'oauth2'


class EntityType(str, Enum):
    INVOICE = 'invoice'
    PURCHASE_ORDER = 'purchase_order'

    @property
    def reference_field(self) -> str:
        """Kolom nomor dokumen yang human readable"""
        if self is EntityType.INVOICE:
            return 'invoice_number'
        return 'po_number'


class SyncAction(str, Enum):
    SYNC_ALL = 'sync_all'
    SYNC_ENTITY = 'sync_entity'


class SyncStatus(str, Enum):
    IN_PROGRESS = 'in_progress'
    SUCCESS = 'success'
    FAILED = 'failed'
    PARTIAL = 'partial'


class ERPType(str, Enum):
    SAP_S4HANA = 'sap_s4hana'
    SAP_BUSINESS_ONE = 'sap_business_one'
    ORACLE_NETSUITE = 'oracle_netsuite'
    ORACLE_FUSION = 'oracle_fusion'
    MICROSOFT_DYNAMICS_365 = 'microsoft_dynamics_365'
    MICROSOFT_DYNAMICS_NAV = 'microsoft_dynamics_nav'
    SAGE_INTACCT = 'sage_intacct'
    QUICKBOOKS_ENTERPRISE = 'quickbooks_enterprise'
    TALLY_PRIME = 'tally_prime'
    CUSTOM_REST = 'custom_rest'


TERMINAL_LOG_STATUSES = (SyncStatus.SUCCESS, SyncStatus.FAILED)
