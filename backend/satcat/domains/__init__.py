"""
Domain Layer

包含應用程序的核心領域模型和業務邏輯，按功能領域分為多個子模塊：

- common: 所有領域共用的基礎模型
- satellite: 衛星 TLE 記錄與軌道狀態快取
"""
