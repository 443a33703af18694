"""
Lens Production Monitor - レンズ製造モニタリング バックエンド

## アーキテクチャ概要

レイヤー構造 (依存関係は下位→上位のみ):

┌─────────────────────────────────────────────────────┐
│ api/                                                │  最上位層
│  ├── main.py - FastAPI アプリ / ライフサイクル      │
│  ├── routes/ - /api/failures, order, defects ...    │
│  └── services/db_service.py - DB接続の一元管理      │
├─────────────────────────────────────────────────────┤
│ backend/                                            │  中間層
│  ├── enricher.py - 設備ID参照の設備名補完           │
│  ├── db/ - 生産DBアクセス (SQLAlchemy Core)         │
│  └── logging/ - アプリケーションロガー             │
├─────────────────────────────────────────────────────┤
│ config/                                             │  設定層
│  └── settings.py - 環境変数管理 (Pydantic Settings)│
├─────────────────────────────────────────────────────┤
│ schemas/                                            │  最下位層
│  ├── equipment.py - FailureRecord, OptionItem      │
│  └── lens_order.py - LensOrder                     │
└─────────────────────────────────────────────────────┘

## 依存ルール

1. **上位層 → 下位層**: 許可 (api → backend → config → schemas)
2. **下位層 → 上位層**: 禁止 (循環参照防止)
3. **schemas/**: 外部ライブラリ (pydantic) のみに依存
4. **backend/enricher.py**: DBには直接依存せず、設備マスタ取得関数を注入される

## 使用例

```python
from backend.db import ProductionRepository, create_db_engine
from backend.enricher import MessageEnricher

repo = ProductionRepository(create_db_engine("mysql+pymysql://root@localhost/lesha"))
enricher = MessageEnricher(repo.fetch_equipment_titles)
enricher.enrich("Оборудование 7 перегрето")
```
"""

__version__ = "0.1.0"
