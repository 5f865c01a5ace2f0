"""GraphQL documents sent to the LeetCode ``/graphql`` endpoint."""

DAILY_CHALLENGE_QUERY = """
query questionOfToday {
    activeDailyCodingChallengeQuestion {
        date
        link
        question {
            questionId
            questionFrontendId
            title
            titleSlug
            content
            difficulty
            isPaidOnly
            acRate
            topicTags { name slug }
            codeSnippets { lang langSlug code }
            exampleTestcases
            hints
        }
    }
}
"""

PROBLEM_QUERY = """
query questionData($titleSlug: String!) {
    question(titleSlug: $titleSlug) {
        questionId
        questionFrontendId
        title
        titleSlug
        content
        isPaidOnly
        difficulty
        likes
        dislikes
        similarQuestions
        topicTags { name slug }
        codeSnippets { lang langSlug code }
        stats
        hints
        sampleTestCase
        exampleTestcases
        metaData
    }
}
"""

SEARCH_PROBLEMS_QUERY = """
query problemsetQuestionList(
    $categorySlug: String
    $limit: Int
    $skip: Int
    $filters: QuestionListFilterInput
) {
    problemsetQuestionList: questionList(
        categorySlug: $categorySlug
        limit: $limit
        skip: $skip
        filters: $filters
    ) {
        total: totalNum
        questions: data {
            title
            titleSlug
            difficulty
            acRate
            topicTags { slug }
        }
    }
}
"""

USER_PROFILE_QUERY = """
query getUserProfile($username: String!) {
    matchedUser(username: $username) {
        username
        githubUrl
        profile {
            realName
            userAvatar
            countryName
            company
            school
            ranking
        }
        submitStats {
            totalSubmissionNum { difficulty count submissions }
            acSubmissionNum { difficulty count submissions }
        }
    }
}
"""

USER_CONTEST_QUERY = """
query userContestRankingInfo($username: String!) {
    userContestRanking(username: $username) {
        attendedContestsCount
        rating
        globalRanking
        totalParticipants
        topPercentage
        badge { name }
    }
    userContestRankingHistory(username: $username) {
        attended
        trendDirection
        problemsSolved
        totalProblems
        finishTimeInSeconds
        rating
        ranking
        contest { title startTime }
    }
}
"""

RECENT_SUBMISSIONS_QUERY = """
query recentSubmissions($username: String!, $limit: Int) {
    recentSubmissionList(username: $username, limit: $limit) {
        id
        title
        titleSlug
        timestamp
        statusDisplay
        lang
    }
}
"""

RECENT_AC_SUBMISSIONS_QUERY = """
query recentAcSubmissions($username: String!, $limit: Int) {
    recentAcSubmissionList(username: $username, limit: $limit) {
        id
        title
        titleSlug
        time
        timestamp
        statusDisplay
        lang
    }
}
"""

USER_STATUS_QUERY = """
query globalData {
    userStatus {
        userId
        isSignedIn
        isPremium
        username
        avatar
        isAdmin
    }
}
"""

SUBMISSION_DETAIL_QUERY = """
query submissionDetails($submissionId: Int!) {
    submissionDetails(submissionId: $submissionId) {
        runtime
        runtimeDisplay
        runtimePercentile
        memory
        memoryDisplay
        memoryPercentile
        code
        timestamp
        statusCode
        lang { name verboseName }
        question { questionId titleSlug }
        notes
        topicTags { tagId slug name }
        runtimeError
        compileError
        lastTestcase
        totalCorrect
        totalTestcases
    }
}
"""

USER_PROGRESS_QUESTIONS_QUERY = """
query userProgressQuestionList($filters: UserProgressQuestionListInput) {
    userProgressQuestionList(filters: $filters) {
        totalNum
        questions {
            translatedTitle
            frontendId
            title
            titleSlug
            difficulty
            lastSubmittedAt
            numSubmitted
            questionStatus
            lastResult
            topicTags { name nameTranslated slug }
        }
    }
}
"""

SOLUTION_ARTICLES_QUERY = """
query ugcArticleSolutionArticles(
    $questionSlug: String!
    $orderBy: ArticleOrderByEnum
    $userInput: String
    $tagSlugs: [String!]
    $skip: Int
    $first: Int
) {
    ugcArticleSolutionArticles(
        questionSlug: $questionSlug
        orderBy: $orderBy
        userInput: $userInput
        tagSlugs: $tagSlugs
        skip: $skip
        first: $first
    ) {
        totalNum
        pageInfo { hasNextPage }
        edges {
            node {
                uuid
                title
                slug
                summary
                author { realName userAvatar userSlug userName }
                articleType
                topicId
                topic { id topLevelCommentCount }
                tags { name slug tagType }
                createdAt
                updatedAt
                hitCount
                canSee
                reactions { count reactionType }
            }
        }
    }
}
"""

SOLUTION_ARTICLE_DETAIL_QUERY = """
query ugcArticleSolutionArticle($topicId: ID) {
    ugcArticleSolutionArticle(topicId: $topicId) {
        uuid
        title
        slug
        summary
        content
        author { realName userAvatar userSlug userName }
        articleType
        topicId
        topic { id topLevelCommentCount }
        tags { name slug tagType }
        createdAt
        updatedAt
        hitCount
        canSee
        hasVideoArticle
        prev { uuid slug topicId title }
        next { uuid slug topicId title }
    }
}
"""
