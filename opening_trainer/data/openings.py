# opening_trainer/data/openings.py
# 內建開局資料庫。
#
# 格式：
# OPENINGS = [ {id, name, eco, description, moves}, ... ]
#
# moves 為 SAN 走法，從初始局面開始；順序即開放對局比對時的優先順序。

OPENINGS = [
    # --- 1.e4 e5 ---
    {
        "id": "italian-game",
        "name": "Italian Game",
        "eco": "C50",
        "description": "White develops the bishop to c4, eyeing the weak f7 square.",
        "moves": ["e4", "e5", "Nf3", "Nc6", "Bc4", "Bc5"],
    },
    {
        "id": "ruy-lopez",
        "name": "Ruy Lopez",
        "eco": "C60",
        "description": "The Spanish Game: the bishop pressures the knight defending e5.",
        "moves": ["e4", "e5", "Nf3", "Nc6", "Bb5"],
    },
    {
        "id": "scotch-game",
        "name": "Scotch Game",
        "eco": "C45",
        "description": "White strikes in the centre at once with d4.",
        "moves": ["e4", "e5", "Nf3", "Nc6", "d4", "exd4", "Nxd4"],
    },
    {
        "id": "four-knights",
        "name": "Four Knights Game",
        "eco": "C47",
        "description": "Both sides develop their knights symmetrically.",
        "moves": ["e4", "e5", "Nf3", "Nc6", "Nc3", "Nf6"],
    },
    {
        "id": "petrov-defense",
        "name": "Petrov's Defense",
        "eco": "C42",
        "description": "Black counterattacks e4 instead of defending e5.",
        "moves": ["e4", "e5", "Nf3", "Nf6"],
    },
    {
        "id": "kings-gambit",
        "name": "King's Gambit",
        "eco": "C30",
        "description": "A romantic pawn sacrifice to open the f-file.",
        "moves": ["e4", "e5", "f4"],
    },
    {
        "id": "kings-gambit-accepted",
        "name": "King's Gambit Accepted",
        "eco": "C33",
        "description": "Black takes the gambit pawn on f4.",
        "moves": ["e4", "e5", "f4", "exf4"],
    },
    {
        "id": "vienna-game",
        "name": "Vienna Game",
        "eco": "C25",
        "description": "White develops the queen's knight first, keeping f4 in reserve.",
        "moves": ["e4", "e5", "Nc3"],
    },
    # --- 1.e4 其他 ---
    {
        "id": "sicilian-defense",
        "name": "Sicilian Defense",
        "eco": "B20",
        "description": "Black fights for d4 from the flank with the c-pawn.",
        "moves": ["e4", "c5"],
    },
    {
        "id": "sicilian-najdorf",
        "name": "Sicilian Najdorf",
        "eco": "B90",
        "description": "The flexible ...a6, one of the sharpest systems in chess.",
        "moves": ["e4", "c5", "Nf3", "d6", "d4", "cxd4", "Nxd4", "Nf6", "Nc3", "a6"],
    },
    {
        "id": "sicilian-dragon",
        "name": "Sicilian Dragon",
        "eco": "B70",
        "description": "Black fianchettoes the bishop on the long diagonal.",
        "moves": ["e4", "c5", "Nf3", "d6", "d4", "cxd4", "Nxd4", "Nf6", "Nc3", "g6"],
    },
    {
        "id": "french-defense",
        "name": "French Defense",
        "eco": "C00",
        "description": "A solid pawn chain; Black challenges the centre with ...d5.",
        "moves": ["e4", "e6", "d4", "d5"],
    },
    {
        "id": "caro-kann-defense",
        "name": "Caro-Kann Defense",
        "eco": "B12",
        "description": "Black supports ...d5 with the c-pawn, keeping the light bishop free.",
        "moves": ["e4", "c6", "d4", "d5"],
    },
    {
        "id": "scandinavian-defense",
        "name": "Scandinavian Defense",
        "eco": "B01",
        "description": "Black immediately challenges e4 and recaptures with the queen.",
        "moves": ["e4", "d5", "exd5", "Qxd5"],
    },
    {
        "id": "pirc-defense",
        "name": "Pirc Defense",
        "eco": "B07",
        "description": "A hypermodern setup: Black lets White build a centre to attack it later.",
        "moves": ["e4", "d6", "d4", "Nf6", "Nc3", "g6"],
    },
    {
        "id": "alekhine-defense",
        "name": "Alekhine's Defense",
        "eco": "B02",
        "description": "Black provokes the e-pawn forward with the knight.",
        "moves": ["e4", "Nf6"],
    },
    # --- 1.d4 ---
    {
        "id": "queens-gambit",
        "name": "Queen's Gambit",
        "eco": "D06",
        "description": "White offers the c-pawn to deflect Black's d-pawn.",
        "moves": ["d4", "d5", "c4"],
    },
    {
        "id": "queens-gambit-declined",
        "name": "Queen's Gambit Declined",
        "eco": "D30",
        "description": "Black keeps the strong point on d5 with ...e6.",
        "moves": ["d4", "d5", "c4", "e6"],
    },
    {
        "id": "queens-gambit-accepted",
        "name": "Queen's Gambit Accepted",
        "eco": "D20",
        "description": "Black takes on c4 and aims for quick development.",
        "moves": ["d4", "d5", "c4", "dxc4"],
    },
    {
        "id": "slav-defense",
        "name": "Slav Defense",
        "eco": "D10",
        "description": "Black supports d5 with the c-pawn.",
        "moves": ["d4", "d5", "c4", "c6"],
    },
    {
        "id": "london-system",
        "name": "London System",
        "eco": "D02",
        "description": "A quiet system with an early Bf4 for White.",
        "moves": ["d4", "d5", "Nf3", "Nf6", "Bf4"],
    },
    {
        "id": "kings-indian-defense",
        "name": "King's Indian Defense",
        "eco": "E60",
        "description": "Black concedes the centre and prepares a kingside counterattack.",
        "moves": ["d4", "Nf6", "c4", "g6", "Nc3", "Bg7", "e4", "d6"],
    },
    {
        "id": "nimzo-indian-defense",
        "name": "Nimzo-Indian Defense",
        "eco": "E20",
        "description": "Black pins the c3 knight to control e4.",
        "moves": ["d4", "Nf6", "c4", "e6", "Nc3", "Bb4"],
    },
    {
        "id": "grunfeld-defense",
        "name": "Grünfeld Defense",
        "eco": "D80",
        "description": "Black strikes at the centre with ...d5 after the fianchetto setup.",
        "moves": ["d4", "Nf6", "c4", "g6", "Nc3", "d5"],
    },
    {
        "id": "catalan-opening",
        "name": "Catalan Opening",
        "eco": "E01",
        "description": "Queen's Gambit ideas combined with a kingside fianchetto.",
        "moves": ["d4", "Nf6", "c4", "e6", "g3"],
    },
    {
        "id": "dutch-defense",
        "name": "Dutch Defense",
        "eco": "A80",
        "description": "Black grabs e4 control with the f-pawn.",
        "moves": ["d4", "f5"],
    },
    # --- 側翼開局 ---
    {
        "id": "english-opening",
        "name": "English Opening",
        "eco": "A10",
        "description": "White controls d5 from the flank.",
        "moves": ["c4"],
    },
    {
        "id": "reti-opening",
        "name": "Réti Opening",
        "eco": "A09",
        "description": "A hypermodern start with Nf3 and c4 against ...d5.",
        "moves": ["Nf3", "d5", "c4"],
    },
    {
        "id": "birds-opening",
        "name": "Bird's Opening",
        "eco": "A02",
        "description": "White grabs e5 control with the f-pawn.",
        "moves": ["f4"],
    },
]
