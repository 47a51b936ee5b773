"""
Custom Exceptions untuk ERP Sync Services
=========================================

Definisi semua custom exceptions yang digunakan dalam sync engine
"""

class SyncServiceException(Exception):
    """Base exception untuk semua sync engine errors"""
    def __init__(self, message, error_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self):
        """Body JSON untuk error response (tanpa key 'error')"""
        data = {
            'message': self.message,
            'error_code': self.error_code,
        }
        if self.details:
            data['details'] = self.details
        return data

class BusinessRuleError(SyncServiceException):
    """Error untuk business rule violations"""
    def __init__(self, message, rule_code=None, details=None):
        super().__init__(message, rule_code or 'BUSINESS_RULE_ERROR', details)
        self.rule_code = rule_code

class IntegrationConfigError(BusinessRuleError):
    """Error ketika konfigurasi integration yang tersimpan tidak valid"""
    def __init__(self, message, integration_id=None, details=None):
        super().__init__(message, 'INTEGRATION_CONFIG_ERROR', details)
        self.integration_id = integration_id

class FieldMappingError(BusinessRuleError):
    """Error ketika field mapping tidak bisa diterapkan ke entity"""
    def __init__(self, message, erp_field_path=None, details=None):
        super().__init__(message, 'FIELD_MAPPING_ERROR', details)
        self.erp_field_path = erp_field_path

class SyncLogStateError(BusinessRuleError):
    """Error untuk transisi status sync log yang tidak valid"""
    def __init__(self, message, log_id=None, details=None):
        super().__init__(message, 'SYNC_LOG_STATE_ERROR', details)
        self.log_id = log_id

class AuthenticationError(SyncServiceException):
    """Error untuk authentication failures"""
    def __init__(self, message="Authentication failed", details=None):
        super().__init__(message, 'AUTHENTICATION_ERROR', details)

class ERPIntegrationError(SyncServiceException):
    """Error untuk ERP integration failures"""
    def __init__(self, message, erp_response=None, error_code='ERP_INTEGRATION_ERROR', details=None):
        super().__init__(message, error_code, details)
        self.erp_response = erp_response

class TransientNetworkError(ERPIntegrationError):
    """Timeout atau connection failure ke ERP; boleh di-retry"""
    def __init__(self, message, details=None):
        super().__init__(message, error_code='TRANSIENT_NETWORK_ERROR', details=details)

class TerminalERPRejection(ERPIntegrationError):
    """ERP menolak request dengan 4xx; tidak di-retry"""
    def __init__(self, status_code, erp_response=None, details=None):
        super().__init__(f"ERP rejected request: HTTP {status_code}", erp_response,
                         error_code='TERMINAL_ERP_REJECTION', details=details)
        self.status_code = status_code

class NotFoundError(SyncServiceException):
    """Error ketika resource tidak ditemukan"""
    def __init__(self, resource_type, resource_id, details=None):
        message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message, 'NOT_FOUND', details)
        self.resource_type = resource_type
        self.resource_id = resource_id
