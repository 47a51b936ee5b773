"""
API Response Models
===================

Standardized API response models.
"""

class APIResponse:
    """Standard API response format"""

    @staticmethod
    def success(data=None, message="Success"):
        return {
            "success": True,
            "message": message,
            "data": data
        }

    @staticmethod
    def sync_result(synced: int, failed: int):
        return {
            "success": True,
            "synced": synced,
            "failed": failed
        }
