"""Editable wire keys and on-screen text."""

from __future__ import annotations

# Column names used by the spreadsheet-backed order store.
FIELD_ROW_INDEX = "rowIndex"
FIELD_ORDER_NUMBER = "訂單編號"
FIELD_TIMESTAMP = "Timestamp"
FIELD_ITEMS = "品項"
FIELD_TOTAL_PRICE = "總價"
FIELD_STATUS = "狀態"

STATUS_LABEL_SERVED = "已出餐"
STATUS_LABEL_DELETED = "已刪除"

ITEM_SEPARATOR = ","

MODE_CONFIRM = "confirm"
MODE_SOFT_DELETE = "softDelete"
MODE_RESTORE = "restore"
MODE_FETCH = "fetch"

APP_TITLE = "內場出餐管理"
APP_SUB_TITLE = "訂單看板"

VIEW_TITLES: dict[str, str] = {
    "main": "當前訂單",
    "revenue": "營業額報告",
    "history": "歷史紀錄",
}

NAV_LABELS: dict[str, str] = {
    "main": "主頁面",
    "revenue": "營業額報告",
    "history": "歷史紀錄",
}

LOADING_TEXT = "載入中..."
EMPTY_ACTIVE_TEXT = "目前沒有新訂單"
EMPTY_HISTORY_TEXT = "目前沒有歷史訂單"

ORDER_NUMBER_LABEL = "訂單編號"
TIME_LABEL = "時間"
ITEMS_LABEL = "品項"
REVENUE_BADGE_LABEL = "今日"

MONTHLY_REVENUE_CAPTION = "本月累積營業額 (僅統計已出餐訂單)"
DAILY_CHART_CAPTION = "每日營業額折線圖"
MONTHLY_REVENUE_UNAVAILABLE = "資料無法取得"
DAILY_CHART_UNAVAILABLE = "圖表資料無法取得"

DIALOG_CONFIRM_LABEL = "確定"
DIALOG_CANCEL_LABEL = "取消"

DELETE_PROMPT_TITLE = "確認刪除"
DELETE_PROMPT_MESSAGE = "確定要將此訂單標記為已刪除嗎？此操作會將訂單從主列表移除。"

ERROR_TITLES_BY_OPERATION: dict[str, str] = {
    MODE_FETCH: "載入資料時發生錯誤",
    MODE_CONFIRM: "確認訂單時發生錯誤",
    MODE_SOFT_DELETE: "刪除訂單時發生錯誤",
    MODE_RESTORE: "還原訂單時發生錯誤",
}

FETCH_ERROR_MESSAGE = "請檢查網路連線或 Apps Script 設定。錯誤訊息: {error}"
ACTION_ERROR_MESSAGE = "錯誤訊息: {error}"

HELP_TEXT = "J/K 移動  C 確認出餐  D 刪除  U 還原  R 重新整理  M 導覽  1/2/3 切換頁面  Ctrl+Q 離開"
