from nailbook.domain.entities.service import PRICE_QUOTE, Service
from nailbook.domain.entities.stylist import Stylist


CATEGORY_LABELS: dict[str, str] = {
    "hand": "手部光療 / 美甲",
    "foot": "足部光療 / 美甲",
    "care": "保養與延甲",
    "removal": "卸甲服務",
    "combo": "常見組合",
}

SERVICES: tuple[Service, ...] = (
    # hand
    Service("h1", "單色 / 跳色", "hand", 500, 60),
    Service("h2", "漸層 / 貓眼", "hand", 600, 90),
    Service("h3", "暈染 / 亮粉等", "hand", 700, 90),
    Service("h4", "法式", "hand", 700, 120),
    Service("h5", "自帶圖片設計", "hand", PRICE_QUOTE, 150),
    # foot
    Service("f1", "足部單色/貓眼/跳色", "foot", 600, 60),
    # care
    Service("c1", "手部保養", "care", 400, 45),
    Service("c2", "甲片延甲 (10指)", "care", 1000, 60),
    Service("c3", "甲片延甲 (5指以下)", "care", 500, 30),
    # removal
    Service("r1", "手/足單卸甲", "removal", 300, 30),
    Service("r2", "延甲卸甲", "removal", 500, 60),
    # combo
    Service("cb1", "手部卸甲 + 光療", "combo", 800, 90),
    Service("cb2", "手部卸甲 + 光療 + 保養", "combo", 1100, 135),
    Service("cb3", "手足卸甲 + 手足光療", "combo", 1500, 180),
)

STYLISTS: tuple[Stylist, ...] = (
    Stylist(
        "s1",
        "虹",
        "https://www.dropbox.com/scl/fi/p5yp0ff6r36hyv5314hqu/p1.jpg?rlkey=2r9l80w2q1ljzn2utoyev9gux&st=vjzu6w4h&raw=1",
    ),
    Stylist(
        "s2",
        "敬",
        "https://www.dropbox.com/scl/fi/70tckw1bxps5sjph2ht27/p2.jpg?rlkey=js9dm1zc1h7yduwzha40trtvk&st=zmfv5fb2&raw=1",
    ),
    Stylist(
        "s3",
        "芮綺",
        "https://www.dropbox.com/scl/fi/fyonnvr9fhc2bni36ro22/p3.jpg?rlkey=06u8rsnb4n2pik7nnrdhfaqdb&st=bwzev9h4&raw=1",
    ),
)
