"""Built-in Dhivehi word list used to generate typing tests."""

DHIVEHI_WORDS = (
    "ދިވެހި", "ރާއްޖެ", "މާލެ", "ފޮތް", "ގޭ", "ކާނާ", "ފެން", "ކަނޑު",
    "ރަށް", "ދޯނި", "މަސް", "ބަތް", "ލޮލް", "އަތް", "ފައި", "ބޯ",
    "ހިތް", "ވަށް", "މީހާ", "ކުއްޖާ", "އަންހެން", "ފިރިހެން", "ބަރު",
    "ލުއި", "ރީތި", "ބޮޑު", "ކުޑަ", "ދިގު", "ކުރު", "ހޫނު", "ފިނި",
    "ރަތް", "ނޫ", "ހުދު", "ކަޅު", "ފެހި", "ރީނދޫ", "ހަވީރު", "ހެނދުނު",
    "ރޭގަނޑު", "މެންދުރު", "ދުވަސް", "ހަފްތާ", "އަހަރު", "ސްކޫލް",
    "ކުލަ", "ވާހަކަ", "ލިޔުން", "ކިޔުން", "ޓައިޕް", "ބަސް", "ބަހުރުވަ",
    "ގަސް", "މާ", "ފަތް", "ގަލް", "ވެލި", "ރާޅު", "ވައި", "ވާރޭ",
    "އިރު", "ހަނދު", "ތަރި", "އުޑު", "ބިން", "ފަޅު", "ކަރަ",
    "ބަނބުކެޔޮ", "ރުއް", "ކާށި", "ހަކުރު", "ލޮނު", "ސައި", "ކިރު",
    "ބިސް", "ހަނޑޫ", "ބޭސް", "ދަރި", "މަންމަ", "ބައްޕަ", "އެކުވެރި",
    "ގޯތި", "ދޮރު", "ކުޅުން", "ދުވުން", "ފީނުން", "ނިދުން", "ކެއުން",
    "ބުއިން", "ހިނގުން", "ދަތުރު", "ރަސްމީ", "ޤައުމު", "ސަރުކާރު",
    "ދައުލަތް", "ޢިލްމު", "ތަޢުލީމު", "ހެޔޮ", "ނުބައި", "އުފާ",
    "ހިތާމަ", "ލޯބި", "ރަނގަޅު", "ފޯނު", "ނަން", "އަދަދު", "އެކެއް",
    "ދެއް", "ތިނެއް", "ހަތަރެއް", "ފަހެއް", "ހައެއް", "ހަތެއް",
    "އަށެއް", "ނުވައެއް", "ދިހައެއް",
)
