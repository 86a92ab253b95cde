# -*- coding: utf-8 -*-


# --- 開局練習設定 ---
AUTO_MOVE_DELAY_MS = 400        # 電腦走棋延遲
FIRST_AUTO_MOVE_DELAY_MS = 500  # 執黑時，電腦第一步的延遲
REVERT_DELAY_MS = 500           # 錯誤走法顯示多久後撤回

# --- 開局測驗設定 ---
QUIZ_START_DELAY_MS = 300       # 動畫開始前的延遲
QUIZ_STEP_INTERVAL_MS = 600     # 每一步之間的間隔
QUIZ_OPTION_COUNT = 4           # 選項數量（含正確答案）

# --- 視窗設定 ---
WINDOW_TITLE = "西洋棋開局訓練器"
WINDOW_SIZE = (1280, 760)

# --- 日誌設定 ---
LOG_LEVEL = "INFO"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
