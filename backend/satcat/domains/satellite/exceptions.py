"""
衛星領域例外

服務層只拋出這些型別，API 層負責轉換為 HTTP 狀態碼。
"""

from typing import Optional


class SatelliteError(Exception):
    """衛星領域例外基類"""


class MalformedTLE(SatelliteError, ValueError):
    """TLE 無法推導出軌道狀態（長度、校驗和、數值欄位等錯誤）"""

    def __init__(self, message: str, line_one: Optional[str] = None, line_two: Optional[str] = None):
        super().__init__(message)
        self.line_one = line_one
        self.line_two = line_two


class SatelliteNotFound(SatelliteError, LookupError):
    """指定 ID 的衛星不存在"""

    def __init__(self, satellite_id: str):
        super().__init__(f"找不到 ID 為 {satellite_id} 的衛星")
        self.satellite_id = satellite_id


class InvalidSatelliteData(SatelliteError, ValueError):
    """非 TLE 欄位的資料驗證失敗，例如空白名稱"""


class StoreUnavailable(SatelliteError):
    """儲存庫操作失敗"""
