"""
Static cosmetic catalog: avatar frames and titles.

Frames and titles in AVATAR_FRAMES / ACHIEVEMENT_TITLES are earned by meeting
their unlock condition. SHOP_ITEMS are bought with diamonds; some also carry a
level requirement before they can be bought.
"""
import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


class CosmeticType(str, enum.Enum):
    FRAME = "frame"
    TITLE = "title"


class Rarity(str, enum.Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"


@dataclass(frozen=True)
class UnlockCondition:
    """All requirements that are set must hold"""
    level: Optional[int] = None
    xp: Optional[int] = None
    diamonds: Optional[int] = None
    creation_count: Optional[int] = None
    streak: Optional[int] = None


@dataclass(frozen=True)
class CosmeticItem:
    id: str
    type: CosmeticType
    name: str
    rarity: Rarity
    unlock_condition: Optional[UnlockCondition] = None
    price: Optional[int] = None

    @property
    def is_shop_item(self) -> bool:
        return self.price is not None


def _frame(item_id, name, rarity, level=None, **condition) -> CosmeticItem:
    unlock = UnlockCondition(level=level, **condition) if level or condition else None
    return CosmeticItem(item_id, CosmeticType.FRAME, name, rarity, unlock)


def _title(item_id, name, rarity, level=None, **condition) -> CosmeticItem:
    unlock = UnlockCondition(level=level, **condition) if level or condition else None
    return CosmeticItem(item_id, CosmeticType.TITLE, name, rarity, unlock)


AVATAR_FRAMES: Tuple[CosmeticItem, ...] = (
    _frame("default", "Mặc định", Rarity.COMMON),
    _frame("wood-basic", "Gỗ Mộc", Rarity.COMMON, level=2),
    _frame("neon-blue", "Neon Xanh", Rarity.RARE, level=5),
    _frame("neon-pink", "Neon Hồng", Rarity.RARE, level=10),
    _frame("musical-note", "Nốt Nhạc", Rarity.RARE, level=15),
    _frame("gradient-spin", "Xoay Sắc Màu", Rarity.EPIC, level=20),
    _frame("sakura-bloom", "Hoa Anh Đào", Rarity.EPIC, level=25),
    _frame("cyber-tech", "Cyber", Rarity.EPIC, level=30),
    _frame("angel-wings", "Cánh Thiên Thần", Rarity.LEGENDARY, level=35),
    _frame("demon-aura", "Hào Quang Quỷ", Rarity.LEGENDARY, level=40),
    _frame("thunder-storm", "Bão Sấm", Rarity.LEGENDARY, level=45),
    _frame("legendary-gold", "Vàng Huyền Thoại", Rarity.LEGENDARY, level=50),
    _frame("ice-crystal", "Pha Lê Băng", Rarity.LEGENDARY, level=55),
    _frame("love-beat", "Nhịp Yêu", Rarity.EPIC, level=60),
    _frame("galaxy-void", "Thiên Hà", Rarity.MYTHIC, level=70),
    _frame("matrix-code", "Ma Trận", Rarity.MYTHIC, level=80),
    _frame("rainbow-glitch", "Cầu Vồng Glitch", Rarity.MYTHIC, level=90),
    _frame("mythic-fire", "Lửa Thần Thoại", Rarity.MYTHIC, level=100),
    _frame("infinity-god", "Vô Cực", Rarity.MYTHIC, level=120),
    _frame("streak-flame", "Ngọn Lửa Chuyên Cần", Rarity.EPIC, streak=30),
    _frame("creator-star", "Ngôi Sao Sáng Tạo", Rarity.RARE, creation_count=100),
)

ACHIEVEMENT_TITLES: Tuple[CosmeticItem, ...] = (
    _title("newbie", "Tân Binh", Rarity.COMMON),
    _title("dancer", "Vũ Công", Rarity.COMMON, level=2),
    _title("style-icon", "Biểu Tượng Phong Cách", Rarity.RARE, level=5),
    _title("party-animal", "Quẩy Hết Mình", Rarity.RARE, level=10),
    _title("rhythm-master", "Bậc Thầy Nhịp Điệu", Rarity.RARE, level=15),
    _title("vip", "VIP", Rarity.EPIC, level=20),
    _title("charming", "Vạn Người Mê", Rarity.EPIC, level=25),
    _title("cyber-punk", "Cyber Punk", Rarity.EPIC, level=30),
    _title("angel-voice", "Giọng Ca Thiên Thần", Rarity.LEGENDARY, level=35),
    _title("demon-king", "Quỷ Vương", Rarity.LEGENDARY, level=40),
    _title("thunder-lord", "Chúa Tể Sấm Sét", Rarity.LEGENDARY, level=45),
    _title("glitch-master", "Bậc Thầy Glitch", Rarity.LEGENDARY, level=50),
    _title("ice-queen", "Nữ Hoàng Băng Giá", Rarity.LEGENDARY, level=55),
    _title("heart-breaker", "Kẻ Đánh Cắp Trái Tim", Rarity.EPIC, level=60),
    _title("galaxy-star", "Ngôi Sao Thiên Hà", Rarity.MYTHIC, level=70),
    _title("the-one", "Người Được Chọn", Rarity.MYTHIC, level=80),
    _title("legend", "Huyền Thoại", Rarity.MYTHIC, level=90),
    _title("audition-god", "Thần Audition", Rarity.MYTHIC, level=100),
    _title("loyal-fan", "Fan Trung Thành", Rarity.RARE, streak=7),
    _title("rich-kid", "Đại Gia Kim Cương", Rarity.EPIC, diamonds=1000),
)

SHOP_ITEMS: Tuple[CosmeticItem, ...] = (
    CosmeticItem("shop-frame-01", CosmeticType.FRAME, "Neon Cyan", Rarity.RARE, price=50),
    CosmeticItem("shop-frame-02", CosmeticType.FRAME, "Neon Magenta", Rarity.RARE, price=50),
    CosmeticItem("shop-frame-03", CosmeticType.FRAME, "Hỏa Ngục", Rarity.EPIC, price=150),
    CosmeticItem("shop-frame-04", CosmeticType.FRAME, "Thần Thánh", Rarity.LEGENDARY, UnlockCondition(level=10), price=300),
    CosmeticItem("shop-frame-07", CosmeticType.FRAME, "Hoàng Kim 24K", Rarity.LEGENDARY, UnlockCondition(level=15), price=500),
    CosmeticItem("shop-frame-10", CosmeticType.FRAME, "RGB Master", Rarity.MYTHIC, UnlockCondition(level=20), price=1000),
    CosmeticItem("shop-frame-20", CosmeticType.FRAME, "Vũ Trụ", Rarity.MYTHIC, UnlockCondition(level=30), price=1500),
    CosmeticItem("shop-title-01", CosmeticType.TITLE, "Cyan Neon", Rarity.RARE, price=50),
    CosmeticItem("shop-title-03", CosmeticType.TITLE, "Hỏa Long", Rarity.EPIC, price=150),
    CosmeticItem("shop-title-05", CosmeticType.TITLE, "Hacker", Rarity.RARE, price=100),
    CosmeticItem("shop-title-06", CosmeticType.TITLE, "Đại Gia", Rarity.LEGENDARY, UnlockCondition(level=10), price=500),
    CosmeticItem("shop-title-10", CosmeticType.TITLE, "Minimalist", Rarity.COMMON, price=20),
    CosmeticItem("shop-title-19", CosmeticType.TITLE, "Vua Trò Chơi", Rarity.MYTHIC, UnlockCondition(level=20), price=1000),
    CosmeticItem("shop-title-20", CosmeticType.TITLE, "RGB God", Rarity.MYTHIC, UnlockCondition(level=30), price=2000),
)

ALL_COSMETICS: Tuple[CosmeticItem, ...] = AVATAR_FRAMES + ACHIEVEMENT_TITLES + SHOP_ITEMS

COSMETICS_BY_ID: Dict[str, CosmeticItem] = {item.id: item for item in ALL_COSMETICS}


def get_cosmetic(item_id: str) -> Optional[CosmeticItem]:
    return COSMETICS_BY_ID.get(item_id)


# Messages
ITEM_NOT_FOUND = "Vật phẩm không tồn tại."
ITEM_NOT_FOR_SALE = "Vật phẩm này không bán trong cửa hàng."
LEVEL_REQUIRED = "Bạn cần đạt cấp độ {level} để mua vật phẩm này."
NOT_ENOUGH_DIAMONDS = "Không đủ kim cương. Giá: {price} 💎"
ALREADY_OWNED = "Bạn đã sở hữu vật phẩm này rồi."
ITEM_LOCKED = "Bạn chưa mở khóa vật phẩm này."
PURCHASE_SUCCESS = "Mua \"{name}\" thành công!"
PURCHASE_DESCRIPTION = "Mua vật phẩm: {name}"
PURCHASE_FAILED = "Không thể mua vật phẩm, vui lòng thử lại"
EQUIP_SUCCESS = "Đã trang bị \"{name}\""
