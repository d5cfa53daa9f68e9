"""Built-in word tables used when no provider can be reached.

Entries are ``(term, translation, english_gloss, example)`` tuples. Tables are
keyed by level and by language pair ``"{known}-{target}"``; topic tables are
keyed by topic name and pair. Bump ``TEMPLATE_VERSION`` whenever entries change.
"""

TEMPLATE_VERSION = "2024.1"

LEVEL_DESCRIPTIONS = {
    "A1": "Basic words for everyday communication",
    "A2": "Useful vocabulary for simple situations",
    "B1": "Common set phrases and expressions",
    "B2": "Complex constructions and idioms",
    "C1": "Advanced vocabulary and set expressions",
    "C2": "Professional and academic vocabulary",
}

WORD_TEMPLATES = {
    "A1": {
        "ru-es": [
            ("madre", "мама", "mother", "Mi madre es muy cariñosa."),
            ("padre", "папа", "father", "Mi padre trabaja en una oficina."),
            ("hermana", "сестра", "sister", "Mi hermana es menor que yo."),
            ("hermano", "брат", "brother", "Mi hermano juega al fútbol."),
            ("abuela", "бабушка", "grandmother", "La abuela hace galletas deliciosas."),
            ("abuelo", "дедушка", "grandfather", "El abuelo cuenta historias interesantes."),
            ("bebé", "малыш", "baby", "El bebé está durmiendo."),
            ("niño", "ребёнок", "child", "El niño juega en el parque."),
            ("hombre", "мужчина", "man", "El hombre lee el periódico."),
            ("mujer", "женщина", "woman", "La mujer cocina la cena."),
            ("manzana", "яблоко", "apple", "Como una manzana cada día."),
            ("plátano", "банан", "banana", "Los plátanos son amarillos y dulces."),
            ("naranja", "апельсин", "orange", "Bebo jugo de naranja en el desayuno."),
            ("pan", "хлеб", "bread", "Compramos pan fresco cada mañana."),
            ("leche", "молоко", "milk", "Los niños beben leche para crecer fuertes."),
            ("café", "кофе", "coffee", "Bebo café por la mañana."),
            ("té", "чай", "tea", "¿Te gustaría un poco de té?"),
            ("agua", "вода", "water", "El agua es esencial para la vida."),
            ("jugo", "сок", "juice", "El jugo de manzana es mi favorito."),
            ("pastel", "торт", "cake", "Comemos pastel en los cumpleaños."),
            ("pollo", "курица", "chicken", "El pollo a la parrilla es sano."),
            ("pescado", "рыба", "fish", "El pescado es bueno para el cerebro."),
            ("arroz", "рис", "rice", "El arroz es un alimento básico."),
            ("gato", "кошка", "cat", "El gato duerme en el sofá."),
            ("perro", "собака", "dog", "El perro corre en el jardín."),
            ("casa", "дом", "house", "Vivo en una casa grande."),
            ("mesa", "стол", "table", "La mesa es de madera."),
            ("silla", "стул", "chair", "La silla está junto a la ventana."),
            ("cama", "кровать", "bed", "Mi cama es muy cómoda."),
            ("puerta", "дверь", "door", "Cierra la puerta, por favor."),
            ("ventana", "окно", "window", "Abro la ventana por la mañana."),
            ("libro", "книга", "book", "Leo un libro cada semana."),
            ("sol", "солнце", "sun", "El sol brilla hoy."),
            ("luna", "луна", "moon", "La luna está llena esta noche."),
            ("árbol", "дерево", "tree", "El árbol es muy alto."),
        ],
        "ru-en": [
            ("mother", "мама", "mother", "My mother is very kind."),
            ("father", "папа", "father", "My father works in an office."),
            ("sister", "сестра", "sister", "My sister is younger than me."),
            ("brother", "брат", "brother", "My brother plays football."),
            ("grandmother", "бабушка", "grandmother", "Grandmother makes delicious cookies."),
            ("grandfather", "дедушка", "grandfather", "Grandfather tells interesting stories."),
            ("baby", "малыш", "baby", "The baby is sleeping."),
            ("child", "ребёнок", "child", "The child is playing in the park."),
            ("apple", "яблоко", "apple", "I eat an apple every day."),
            ("banana", "банан", "banana", "Bananas are yellow and sweet."),
            ("bread", "хлеб", "bread", "We buy fresh bread every morning."),
            ("milk", "молоко", "milk", "Children drink milk to grow strong."),
            ("coffee", "кофе", "coffee", "I drink coffee in the morning."),
            ("tea", "чай", "tea", "Would you like some tea?"),
            ("water", "вода", "water", "Water is essential for life."),
            ("cake", "торт", "cake", "We eat cake on birthdays."),
            ("chicken", "курица", "chicken", "Grilled chicken is healthy."),
            ("fish", "рыба", "fish", "Fish is good for your brain."),
            ("cat", "кошка", "cat", "The cat sleeps on the sofa."),
            ("dog", "собака", "dog", "The dog runs in the garden."),
            ("house", "дом", "house", "We live in a small house."),
            ("table", "стол", "table", "The table is made of wood."),
            ("window", "окно", "window", "Please open the window."),
            ("book", "книга", "book", "I read a book every week."),
            ("river", "река", "river", "Fish swim in the clear river."),
        ],
        "en-es": [
            ("madre", "mother", "mother", "Mi madre es muy cariñosa."),
            ("padre", "father", "father", "Mi padre trabaja en una oficina."),
            ("hermano", "brother", "brother", "Mi hermano juega al fútbol."),
            ("manzana", "apple", "apple", "Como una manzana cada día."),
            ("pan", "bread", "bread", "Compramos pan fresco cada mañana."),
            ("leche", "milk", "milk", "Bebo leche por la noche."),
            ("agua", "water", "water", "El agua está fría."),
            ("gato", "cat", "cat", "El gato duerme en el sofá."),
            ("perro", "dog", "dog", "El perro corre en el jardín."),
            ("casa", "house", "house", "Vivo en una casa grande."),
            ("mesa", "table", "table", "La mesa es de madera."),
            ("libro", "book", "book", "Leo un libro cada semana."),
            ("sol", "sun", "sun", "El sol brilla hoy."),
            ("coche", "car", "car", "Mi coche es rojo."),
            ("flor", "flower", "flower", "La flor huele muy bien."),
            ("escuela", "school", "school", "Voy a la escuela en autobús."),
            ("amigo", "friend", "friend", "Mi amigo vive cerca."),
            ("dinero", "money", "money", "No tengo mucho dinero."),
            ("ciudad", "city", "city", "Madrid es una ciudad grande."),
            ("tiempo", "time", "time", "No tengo tiempo hoy."),
        ],
    },
    "A2": {
        "ru-es": [
            ("despertarse", "просыпаться", "wake up", "Me despierto a las siete todos los días."),
            ("vestirse", "одеваться", "get dressed", "Me visto rápidamente por la mañana."),
            ("desayunar", "завтракать", "breakfast", "Desayunamos juntos en familia."),
            ("ducharse", "принимать душ", "shower", "Me ducho cada noche."),
            ("acostarse", "ложиться спать", "bed", "Los niños deben acostarse temprano."),
            ("hacer la tarea", "делать домашнее задание", "homework", "Hago la tarea después de la escuela."),
            ("escuchar música", "слушать музыку", "music", "Escucho música mientras trabajo."),
            ("ir de compras", "ходить за покупками", "shopping", "Vamos de compras los fines de semana."),
            ("cocinar la cena", "готовить ужин", "dinner", "Mamá cocina la cena para la familia."),
            ("lavar los platos", "мыть посуду", "dishes", "Lavo los platos después de cada comida."),
            ("pagar la cuenta", "оплачивать счёт", "bill", "Papá siempre paga la cuenta."),
            ("ahorrar dinero", "экономить деньги", "savings", "Es importante ahorrar dinero."),
            ("reservar un hotel", "бронировать отель", "hotel", "Necesito reservar un hotel para el viaje."),
            ("hacer las maletas", "упаковывать багаж", "suitcase", "No olvides hacer las maletas."),
            ("perder el autobús", "опаздывать на автобус", "bus", "No quiero perder el autobús otra vez."),
            ("pedir direcciones", "спрашивать дорогу", "map", "Los turistas a menudo piden direcciones."),
            ("tomar fotos", "фотографировать", "camera", "Me encanta tomar fotos de monumentos."),
            ("visitar museos", "посещать музеи", "museum", "Visitamos museos para aprender historia."),
            ("tomar notas", "делать записи", "notebook", "Tomo notas durante las reuniones."),
        ],
        "ru-en": [
            ("to wake up", "просыпаться", "alarm clock", "I wake up at seven every day."),
            ("to get dressed", "одеваться", "clothes", "I get dressed quickly in the morning."),
            ("to have breakfast", "завтракать", "breakfast", "We have breakfast together."),
            ("to go shopping", "ходить за покупками", "shopping", "We go shopping at weekends."),
            ("to cook dinner", "готовить ужин", "dinner", "Mum cooks dinner for the family."),
            ("to wash the dishes", "мыть посуду", "dishes", "I wash the dishes after every meal."),
            ("to pay the bill", "оплачивать счёт", "bill", "Dad always pays the bill."),
            ("to save money", "экономить деньги", "piggy bank", "It is important to save money."),
            ("to book a hotel", "бронировать отель", "hotel", "I need to book a hotel for our trip."),
            ("to pack a suitcase", "упаковывать багаж", "suitcase", "Don't forget to pack your suitcase."),
            ("to miss the bus", "опаздывать на автобус", "bus", "I don't want to miss the bus again."),
            ("to ask for directions", "спрашивать дорогу", "map", "Tourists often ask for directions."),
            ("to take photos", "фотографировать", "camera", "Tourists love to take photos."),
            ("to take notes", "делать записи", "notebook", "I take notes during meetings."),
        ],
    },
    "B1": {
        "ru-es": [
            ("hacer un examen", "сдавать экзамен", "exam", "Mañana haré un examen de matemáticas."),
            ("tomar una decisión", "принимать решение", "decision", "Me es difícil tomar decisiones importantes."),
            ("lograr el éxito", "добиваться успеха", "success", "Para lograr el éxito hay que trabajar mucho."),
            ("prestar atención", "обращать внимание", "attention", "Hay que prestar atención a los detalles."),
            ("expresar opinión", "выражать мнение", "opinion", "Todos tienen derecho a expresar su opinión."),
            ("superar dificultades", "преодолевать трудности", "obstacle", "Podemos superar cualquier dificultad juntos."),
            ("alcanzar metas", "достигать цели", "goal", "Para alcanzar metas necesitas motivación."),
            ("dirigir un equipo", "управлять командой", "team", "Ella aprendió a dirigir un equipo."),
            ("analizar datos", "анализировать данные", "chart", "Los científicos analizan datos."),
            ("colaborar con otros", "сотрудничать с другими", "handshake", "Es importante colaborar con el equipo."),
            ("adquirir conocimiento", "приобретать знания", "knowledge", "Leer ayuda a adquirir conocimiento."),
            ("mejorar habilidades", "улучшать способности", "skills", "La práctica ayuda a mejorar tus habilidades."),
        ],
        "ru-en": [
            ("to take an exam", "сдавать экзамен", "exam", "Tomorrow I will take a maths exam."),
            ("to make a decision", "принимать решение", "decision", "It is hard to make important decisions."),
            ("to pay attention", "обращать внимание", "attention", "You should pay attention to details."),
            ("to express an opinion", "выражать мнение", "opinion", "Everyone may express an opinion."),
            ("to overcome difficulties", "преодолевать трудности", "obstacle", "Together we can overcome difficulties."),
            ("to reach a goal", "достигать цели", "goal", "You need motivation to reach a goal."),
            ("to lead a team", "управлять командой", "team", "She learned to lead a team."),
            ("to analyse data", "анализировать данные", "chart", "Scientists analyse data."),
            ("to gain knowledge", "приобретать знания", "knowledge", "Reading helps you gain knowledge."),
            ("to improve skills", "улучшать способности", "skills", "Practice helps to improve skills."),
        ],
    },
    "B2": {
        "ru-en": [
            ("to weigh pros and cons", "взвешивать все за и против", "scales", "Before buying a house, weigh the pros and cons."),
            ("to keep up with the times", "идти в ногу со временем", "clock", "In IT it is important to keep up with the times."),
            ("to take responsibility", "брать на себя ответственность", "leader", "A leader must take responsibility for the team."),
            ("to find common ground", "находить общий язык", "handshake", "It is important to find common ground with colleagues."),
            ("to broaden horizons", "расширять кругозор", "horizon", "Travel helps broaden horizons."),
            ("to call into question", "ставить под сомнение", "question mark", "New data calls this theory into question."),
            ("to strike a balance", "найти баланс", "balance", "Companies must strike a balance between profit and ethics."),
            ("to make headway", "добиваться прогресса", "progress", "The team is making headway."),
            ("to streamline processes", "оптимизировать процессы", "gears", "The new software will streamline our processes."),
            ("to mitigate risks", "снижать риски", "shield", "Insurance helps mitigate financial risks."),
            ("to substantiate claims", "обосновывать утверждения", "evidence", "You need solid data to substantiate your claims."),
            ("to refute arguments", "опровергать аргументы", "debate", "The lawyer tried to refute the arguments."),
        ],
    },
    "C1": {
        "ru-en": [
            ("to challenge established views", "подвергать сомнению устоявшиеся взгляды", "scientist", "Scientists must challenge established views."),
            ("to learn from setbacks", "извлекать уроки из неудач", "stairs", "Entrepreneurs learn from setbacks."),
            ("to adapt to changing conditions", "адаптироваться к изменяющимся условиям", "chameleon", "Companies must adapt to changing conditions."),
            ("to promote sustainable development", "способствовать устойчивому развитию", "wind turbine", "New technologies should promote sustainable development."),
            ("to overcome cultural barriers", "преодолевать культурные барьеры", "bridge", "In business it is important to overcome cultural barriers."),
            ("to cultivate strategic partnerships", "развивать стратегические партнерства", "partnership", "Global companies cultivate strategic partnerships."),
            ("to pioneer breakthrough innovations", "быть пионером прорывных инноваций", "rocket", "Tech giants pioneer breakthrough innovations."),
            ("to navigate unprecedented challenges", "справляться с беспрецедентными вызовами", "compass", "Leaders must navigate unprecedented challenges."),
        ],
    },
}

TOPIC_WORDS = {
    "greetings": {
        "ru-es": [
            ("hola", "привет", "hello", "¡Hola! ¿Cómo estás?"),
            ("adiós", "до свидания", "goodbye", "Adiós, nos vemos mañana."),
            ("buenos días", "доброе утро", "morning", "Buenos días, ¿cómo amaneció?"),
            ("buenas tardes", "добрый день", "afternoon", "Buenas tardes, ¿cómo está?"),
            ("buenas noches", "добрый вечер", "night", "Buenas noches, que descanse bien."),
            ("hasta luego", "до скорого", "wave", "Hasta luego, cuídate mucho."),
            ("nos vemos", "увидимся", "wave", "Nos vemos el próximo lunes."),
            ("saludos", "приветы", "greeting", "Saludos a toda la familia."),
        ],
    },
    "family": {
        "ru-es": [
            ("familia", "семья", "family", "Mi familia es muy grande."),
            ("hermano", "брат", "brother", "Mi hermano es mayor que yo."),
            ("abuelos", "бабушка и дедушка", "grandparents", "Mis abuelos son muy cariñosos."),
            ("amigo", "друг", "friend", "Mi mejor amigo se llama Carlos."),
            ("novia", "девушка", "girlfriend", "Mi novia es muy inteligente."),
            ("primo", "двоюродный брат", "cousin", "Mi primo vive en Sevilla."),
            ("tío", "дядя", "uncle", "Mi tío tiene una granja."),
            ("tía", "тётя", "aunt", "Mi tía cocina muy bien."),
        ],
    },
    "home": {
        "ru-es": [
            ("casa", "дом", "house", "Vivo en una casa grande."),
            ("habitación", "комната", "room", "Mi habitación es muy cómoda."),
            ("baño", "ванная", "bathroom", "El baño está muy limpio."),
            ("cocina", "кухня", "kitchen", "La cocina es pequeña."),
            ("dormitorio", "спальня", "bedroom", "El dormitorio es muy tranquilo."),
            ("silla", "стул", "chair", "Me siento en la silla."),
            ("sofá", "диван", "sofa", "El gato duerme en el sofá."),
            ("escalera", "лестница", "stairs", "La escalera es estrecha."),
        ],
    },
    "food and drinks": {
        "ru-es": [
            ("desayuno", "завтрак", "breakfast", "Como el desayuno a las ocho."),
            ("cena", "ужин", "dinner", "La cena es a las siete."),
            ("menú", "меню", "menu", "Por favor, trae el menú."),
            ("cuenta", "счёт", "bill", "¿Puedo tener la cuenta, por favor?"),
            ("delicioso", "вкусный", "delicious food", "¡Esta comida está deliciosa!"),
            ("sopa", "суп", "soup", "La sopa está caliente."),
            ("queso", "сыр", "cheese", "Me gusta el queso manchego."),
            ("vino", "вино", "wine", "Bebemos vino tinto con la cena."),
        ],
    },
    "shopping": {
        "ru-es": [
            ("tienda", "магазин", "shop", "Voy a la tienda a comprar pan."),
            ("ropa", "одежда", "clothes", "Necesito comprar ropa nueva."),
            ("talla", "размер", "size label", "¿Qué talla necesitas?"),
            ("zapatos", "обувь", "shoes", "Estos zapatos son muy cómodos."),
            ("carrito", "корзина", "shopping cart", "Empujo el carrito por los pasillos."),
            ("vendedor", "продавец", "seller", "El vendedor me ayuda a encontrar productos."),
            ("descuento", "скидка", "discount", "Hay un descuento del veinte por ciento."),
            ("recibo", "чек", "receipt", "Guardo el recibo de la compra."),
        ],
    },
    "travel and transport": {
        "ru-es": [
            ("pasaporte", "паспорт", "passport", "No olvides tu pasaporte."),
            ("hotel", "отель", "hotel", "Nos quedamos en un hotel bonito."),
            ("maleta", "чемодан", "suitcase", "Empaca tu maleta cuidadosamente."),
            ("vuelo", "рейс", "airplane", "Nuestro vuelo está retrasado."),
            ("tren", "поезд", "train", "El tren sale a las nueve."),
            ("billete", "билет", "ticket", "Compré un billete de ida y vuelta."),
            ("estación", "вокзал", "station", "La estación está cerca del centro."),
            ("aeropuerto", "аэропорт", "airport", "Llegamos al aeropuerto temprano."),
        ],
    },
    "health": {
        "ru-es": [
            ("médico", "врач", "doctor", "Voy al médico mañana."),
            ("farmacia", "аптека", "pharmacy", "La farmacia está abierta las 24 horas."),
            ("dolor", "боль", "pain", "Tengo dolor de cabeza."),
            ("síntoma", "симптом", "thermometer", "Los síntomas son fiebre y tos."),
            ("salud", "здоровье", "health", "La salud es lo más importante."),
            ("receta", "рецепт", "prescription", "El médico me dio una receta."),
            ("hospital", "больница", "hospital", "El hospital está lejos."),
            ("pastilla", "таблетка", "pill", "Toma una pastilla después de comer."),
        ],
    },
    "work and professions": {
        "ru-es": [
            ("oficina", "офис", "office", "Trabajo en una oficina grande."),
            ("proyecto", "проект", "project", "Este proyecto es muy importante."),
            ("colega", "коллега", "colleague", "Mi colega es muy útil."),
            ("salario", "зарплата", "salary", "Recibo mi salario mensualmente."),
            ("currículum", "резюме", "resume", "Por favor, envía tu currículum."),
            ("jefe", "начальник", "boss", "Mi jefe es muy exigente."),
            ("reunión", "совещание", "meeting", "La reunión empieza a las diez."),
            ("entrevista", "собеседование", "interview", "Mañana tengo una entrevista."),
        ],
    },
    "weather and nature": {
        "ru-es": [
            ("montaña", "гора", "mountain", "La montaña es muy alta."),
            ("océano", "океан", "ocean", "El océano es muy profundo."),
            ("lago", "озеро", "lake", "El lago es muy tranquilo."),
            ("desierto", "пустыня", "desert", "El desierto es muy caliente."),
            ("valle", "долина", "valley", "El valle es muy verde."),
            ("lluvia", "дождь", "rain", "Hoy hay mucha lluvia."),
            ("nieve", "снег", "snow", "La nieve cubre las montañas."),
            ("viento", "ветер", "wind", "El viento es fuerte hoy."),
        ],
    },
    "emotions and feelings": {
        "ru-es": [
            ("feliz", "счастливый", "happy", "Estoy muy feliz hoy."),
            ("triste", "грустный", "sad", "Está triste porque llueve."),
            ("enojado", "злой", "angry", "Estoy enojado con mi hermano."),
            ("emocionado", "взволнованный", "excited", "Estoy emocionado por el viaje."),
            ("preocupado", "обеспокоенный", "worried", "Estoy preocupado por mi salud."),
            ("cansado", "усталый", "tired", "Estoy muy cansado después del trabajo."),
            ("sorprendido", "удивлённый", "surprised", "Estoy sorprendido por la noticia."),
            ("tranquilo", "спокойный", "calm", "El mar está tranquilo."),
        ],
    },
    "animals": {
        "ru-es": [
            ("perro", "собака", "dog", "Mi perro es muy juguetón."),
            ("gato", "кошка", "cat", "El gato duerme en la ventana."),
            ("pájaro", "птица", "bird", "El pájaro canta en el árbol."),
            ("caballo", "лошадь", "horse", "El caballo galopa en el campo."),
            ("vaca", "корова", "cow", "La vaca da leche."),
            ("cerdo", "свинья", "pig", "El cerdo vive en la granja."),
            ("conejo", "кролик", "rabbit", "El conejo salta muy alto."),
            ("ratón", "мышь", "mouse", "El ratón come queso."),
        ],
        "ru-en": [
            ("dog", "собака", "dog", "My dog is very playful."),
            ("cat", "кошка", "cat", "The cat sleeps on the windowsill."),
            ("bird", "птица", "bird", "The bird sings in the tree."),
            ("horse", "лошадь", "horse", "The horse gallops across the field."),
            ("cow", "корова", "cow", "The cow gives milk."),
            ("rabbit", "кролик", "rabbit", "The rabbit jumps very high."),
        ],
    },
    "colors": {
        "ru-es": [
            ("rojo", "красный", "red", "La manzana es roja."),
            ("azul", "синий", "blue", "El cielo es azul."),
            ("verde", "зелёный", "green", "La hierba es verde."),
            ("amarillo", "жёлтый", "yellow", "El plátano es amarillo."),
            ("negro", "чёрный", "black", "La noche es negra."),
            ("blanco", "белый", "white", "La nieve es blanca."),
            ("gris", "серый", "gray", "Las nubes son grises."),
            ("rosa", "розовый", "pink", "La flor es rosa."),
        ],
    },
}

# Keyword -> topic, for free-text topics that do not match a table name exactly.
TOPIC_KEYWORDS = {
    "hello": "greetings",
    "goodbye": "greetings",
    "relatives": "family",
    "relationship": "family",
    "house": "home",
    "apartment": "home",
    "food": "food and drinks",
    "drink": "food and drinks",
    "restaurant": "food and drinks",
    "shop": "shopping",
    "store": "shopping",
    "buy": "shopping",
    "travel": "travel and transport",
    "transport": "travel and transport",
    "trip": "travel and transport",
    "doctor": "health",
    "medicine": "health",
    "job": "work and professions",
    "work": "work and professions",
    "office": "work and professions",
    "weather": "weather and nature",
    "nature": "weather and nature",
    "emotion": "emotions and feelings",
    "feeling": "emotions and feelings",
    "pet": "animals",
    "colour": "colors",
    "color": "colors",
}

# Fixed pool used for topic rotation.
TOPICS = list(TOPIC_WORDS)
