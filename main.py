# main.py

# -*- coding: utf-8 -*-
import sys
import logging
from PyQt5 import QtWidgets

# 使用絕對導入，從專案根目錄開始
from opening_trainer.config import LOG_LEVEL, LOG_FORMAT
from opening_trainer.core.opening_corpus import load_default_corpus
from opening_trainer.gui.main_window import TrainerMainWindow


def setup_logging():
    """設定全域日誌記錄器。"""
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


def main():
    # 1. 初始化日誌
    setup_logging()

    # 2. 載入並檢查開局資料庫（只在啟動時載入一次）
    logging.info("正在載入開局資料庫...")
    corpus = load_default_corpus()
    broken = corpus.validate()
    if broken:
        logging.warning(f"{len(broken)} 個開局的資料無法完整重播，請檢查 data/openings.py。")

    # 3. 啟動 Qt 應用程式
    app = QtWidgets.QApplication(sys.argv)

    # 4. 創建並顯示主視窗
    window = TrainerMainWindow(corpus)
    window.show()

    # 5. 進入事件循環
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
