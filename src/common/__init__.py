"""
どこで: `common` パッケージ。
何を: engine/api 双方で使う軽量ユーティリティ（環境変数・設定・ロギング・型エイリアス）。
なぜ: 共通基盤を分離し、依存の向きを単純化するため。
"""
