import logging
import math
from typing import List

from sgp4.earth_gravity import wgs72
from sgp4.io import twoline2rv, verify_checksum

from satcat.domains.satellite.exceptions import MalformedTLE
from satcat.domains.satellite.models.dto import TLEEntry
from satcat.domains.satellite.models.satellite_model import (
    OrbitalState,
    TLE_LINE_LENGTH,
)

logger = logging.getLogger(__name__)


def derive_orbital_state(line_one: str, line_two: str) -> OrbitalState:
    """由 TLE 兩行推導 SGP4 軌道狀態

    純函數：相同輸入永遠得到相等的 OrbitalState。

    Args:
        line_one: TLE 第一行（69 字元）
        line_two: TLE 第二行（69 字元）

    Returns:
        OrbitalState: 可重複使用的軌道狀態

    Raises:
        MalformedTLE: 長度、校驗和、欄位格式錯誤，或 SGP4 初始化失敗
    """
    for number, line in ((1, line_one), (2, line_two)):
        if not isinstance(line, str) or len(line) != TLE_LINE_LENGTH:
            raise MalformedTLE(
                f"TLE 第 {number} 行長度必須為 {TLE_LINE_LENGTH} 字元",
                line_one,
                line_two,
            )

    try:
        verify_checksum(line_one, line_two)
        # 使用 SGP4 解析 TLE 數據並完成初始化
        satellite = twoline2rv(line_one, line_two, wgs72)
    except (ValueError, ArithmeticError, TypeError) as e:
        raise MalformedTLE(f"無法解析 TLE 數據: {e}", line_one, line_two) from e

    if satellite.error != 0:
        raise MalformedTLE(
            f"SGP4 初始化失敗（錯誤碼 {satellite.error}）", line_one, line_two
        )

    state = OrbitalState(
        satnum=line_one[2:7].strip(),
        classification=satellite.classification,
        intldesg=satellite.intldesg,
        epochyr=satellite.epochyr,
        epochdays=satellite.epochdays,
        ndot=satellite.ndot,
        nddot=satellite.nddot,
        bstar=satellite.bstar,
        inclo=satellite.inclo,
        nodeo=satellite.nodeo,
        ecco=satellite.ecco,
        argpo=satellite.argpo,
        mo=satellite.mo,
        no_kozai=satellite.no_kozai,
        a=satellite.a,
        alta=satellite.alta,
        altp=satellite.altp,
        method=satellite.method,
    )

    # NaN 或無窮大的元素無法以 JSON 保存，也無法傳播
    for field, value in state.model_dump().items():
        if isinstance(value, float) and not math.isfinite(value):
            raise MalformedTLE(
                f"TLE 欄位 {field} 的值無效: {value}", line_one, line_two
            )
    if state.no_kozai <= 0:
        raise MalformedTLE(
            f"平均運動必須為正數: {state.no_kozai}", line_one, line_two
        )

    return state


def parse_tle_catalog(tle_text: str) -> List[TLEEntry]:
    """解析 TLE 格式的文本（名稱、第一行、第二行），返回 TLE 條目列表

    空白行會被忽略；元素行內容由 derive_orbital_state 驗證。

    Raises:
        MalformedTLE: 三行一組的結構不完整或行首編號錯誤
    """
    numbered = [
        (number, line.rstrip())
        for number, line in enumerate(tle_text.splitlines(), start=1)
        if line.strip()
    ]

    if len(numbered) % 3 != 0:
        raise MalformedTLE(
            f"TLE 目錄行數 {len(numbered)} 不是 3 的倍數（每顆衛星需名稱與兩行 TLE）"
        )

    entries = []
    for i in range(0, len(numbered), 3):
        (_, name), (number_one, line1), (number_two, line2) = numbered[i : i + 3]

        if not line1.startswith("1 "):
            raise MalformedTLE(f"第 {number_one} 行應為 TLE 第一行: {line1}")
        if not line2.startswith("2 "):
            raise MalformedTLE(f"第 {number_two} 行應為 TLE 第二行: {line2}")

        # CelesTrak 有時在名稱前加上 "0 "
        if name.startswith("0 "):
            name = name[2:]

        entries.append(TLEEntry(name=name.strip(), line_one=line1, line_two=line2))

    logger.info(f"解析了 {len(entries)} 條 TLE 數據")
    return entries
