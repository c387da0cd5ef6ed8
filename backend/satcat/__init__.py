"""
satcat: 衛星 TLE 記錄服務

保存 TLE 與由其推導出的 SGP4 軌道狀態，並維持兩者一致。
"""
