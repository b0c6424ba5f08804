from __future__ import annotations

APP_NAME = "CLUB F4"
TAGLINE = "F는 FIELD이다, 그러나 필드는 늘 이들에게 침묵한다. 하여 이들은 걷고 또 걷는다"
BADGE = "THE PRESTIGIOUS FOURSOME"
DISCLAIMER = "Scores are recorded by members. Commentary is machine-generated and for fun only."
